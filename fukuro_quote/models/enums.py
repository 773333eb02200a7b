from enum import Enum


class ServiceKind(str, Enum):
    AUDIO = "audio"
    VIDEO = "video"


class IntakeStatus(str, Enum):
    COLLECTING = "COLLECTING"
    READY = "READY"
    PRICED = "PRICED"


class ExtractionFailureKind(str, Enum):
    AUTHORIZATION = "authorization"
    TRANSPORT = "transport"
    MALFORMED = "malformed"


class TurnRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class DeliverableType(str, Enum):
    FILE = "file"
    LINK = "link"
