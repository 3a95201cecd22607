"""Ship key=value files and the process environment to an HTTP endpoint."""

from envsender.client import DeliveryClient
from envsender.config import SenderConfig, load_config
from envsender.errors import ClientConstructionError, ConfigError, DeliveryError, EnvSenderError, ReadError
from envsender.parser import parse_text, read_env_file
from envsender.records import connectivity_probe, record_from_environment, record_from_file
from envsender.runtime import (
    deliver_environment,
    deliver_file,
    deliver_files,
    deliver_well_known,
    check_connectivity,
)
from shared.constants import CLIENT_VERSION as __version__

__all__ = [
    "DeliveryClient",
    "SenderConfig",
    "load_config",
    "EnvSenderError",
    "ReadError",
    "DeliveryError",
    "ClientConstructionError",
    "ConfigError",
    "parse_text",
    "read_env_file",
    "record_from_file",
    "record_from_environment",
    "connectivity_probe",
    "deliver_file",
    "deliver_files",
    "deliver_environment",
    "deliver_well_known",
    "check_connectivity",
    "__version__",
]
