"""Service layer exports."""

from .combat_engine import CombatEngine
from .economy import EconomyLedger, OfflineReward
from .errors import FactoryError, SaveLoadError
from .game_session import GameSession
from .save_service import LoadedGame, SaveService
from .wave_controller import WaveController

__all__ = [
    "CombatEngine",
    "EconomyLedger",
    "FactoryError",
    "GameSession",
    "LoadedGame",
    "OfflineReward",
    "SaveLoadError",
    "SaveService",
    "WaveController",
]
