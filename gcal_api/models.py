from dataclasses import dataclass
from enum import Enum


class Environment(Enum):
    DEV = "dev"
    TEST = "test"
    PROD = "prod"


class MissingEventPolicy(Enum):
    IGNORE = "ignore"
    RAISE = "raise"


@dataclass(frozen=True)
class ReminderPolicy:
    method: str = "popup"
    minutes: int = 2
    use_default: bool = False


@dataclass(frozen=True)
class ConferencePolicy:
    solution_type: str = "hangoutsMeet"
    request_id: str = "sample123"
