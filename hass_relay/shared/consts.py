from enum import Enum


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Entity id prefix of the helper entities used as relay slots.
RELAY_SLOT_ENTITY_PREFIX = "input_text.mqtt_buffer_"

# Five slots carry envelope fragments, the sixth carries the ready sentinel.
RELAY_DATA_SLOTS = 5
RELAY_READY_SLOT = 6
RELAY_READY_SENTINEL = "END"

# Matches the hub-side input_text maximum length.
RELAY_SLOT_SIZE = 255

DISCOVERY_PREFIX = "homeassistant"
