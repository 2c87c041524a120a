# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Configuration module for loading and parsing configuration files

# Standard library imports
import logging

from pathlib import Path
from typing import List, Optional, Union

# Third-party imports
import yaml

from pydantic import BaseModel, Field, field_validator, model_validator

# Local/package imports
from ziggiz_courier_dropoff_syslog.facility import Facility
from ziggiz_courier_dropoff_syslog.format.base import SyslogFormatter
from ziggiz_courier_dropoff_syslog.format.factory import FORMAT_TYPES, FormatterFactory
from ziggiz_courier_dropoff_syslog.format.rfc5424 import (
    DEFAULT_SD_ID,
    StructuredDataConfig,
    validate_sd_id,
)
from ziggiz_courier_dropoff_syslog.handler import SyslogHandler
from ziggiz_courier_dropoff_syslog.transport.base import Transport
from ziggiz_courier_dropoff_syslog.transport.factory import (
    TRANSPORT_TYPES,
    TransportFactory,
)
from ziggiz_courier_dropoff_syslog.transport.unix import DEFAULT_SOCKET_PATH

logger = logging.getLogger("ziggiz_courier_dropoff_syslog.config")


class LoggerConfig(BaseModel):
    """
    Configuration for individual loggers.

    Attributes:
        name (str): Logger name.
        level (str): Logging level (default: "INFO").
        propagate (bool): Whether to propagate logs to parent (default: True).
    """

    name: str
    level: str = "INFO"
    propagate: bool = True


class StructuredDataSettings(BaseModel):
    """
    Configuration for RFC 5424 STRUCTURED-DATA carrying event metadata.

    Attributes:
        sd_id (str): The SD-ID (default: "tracing-meta@64700").
        with_target (bool): Include the event target (default: False).
        with_module (bool): Include the event module (default: False).
        with_file_and_line (bool): Include source file and line (default: False).
    """

    sd_id: str = DEFAULT_SD_ID
    with_target: bool = False
    with_module: bool = False
    with_file_and_line: bool = False

    @field_validator("sd_id")
    @classmethod
    def check_sd_id(cls, v: str) -> str:
        """Validate that the SD-ID is a valid SD-NAME."""
        return validate_sd_id(v)

    def to_structured_data_config(self) -> StructuredDataConfig:
        return StructuredDataConfig(**self.model_dump())


class Config(BaseModel):
    """
    Main configuration class for the Ziggiz Courier Dropoff Syslog client.

    This class defines the message format, the transport and its endpoint,
    the overrides for derived header fields, and logging.
    """

    # Message format configuration
    format: str = "rfc5424"  # "rfc5424" or "rfc3164"
    facility: str = "user"  # Facility name, e.g. "user", "daemon", "local0"

    # Header field overrides; None means derive from the environment
    hostname: Optional[str] = None
    app_name: Optional[str] = None  # RFC 5424 only
    proc_id: Optional[str] = None  # RFC 5424 only
    tag: Optional[str] = None  # RFC 3164 only
    pid: Optional[int] = None  # RFC 3164 only
    include_pid: bool = True  # Append "[pid]: " to the RFC 3164 tag
    escape_unicode: bool = False  # Write RFC 3164 text as \u{hex} escapes
    with_bom: bool = False  # Prefix RFC 5424 MSG with a UTF-8 BOM
    structured_data: Optional[StructuredDataSettings] = (
        None  # RFC 5424 metadata STRUCTURED-DATA; None disables it
    )

    # Transport configuration
    transport: str = "udp"  # "udp", "tcp", "unix", or "unix_stream"
    host: str = "localhost"
    port: int = 514
    unix_socket_path: str = DEFAULT_SOCKET_PATH  # Path for the Unix transports
    timeout: Optional[float] = None  # Socket timeout in seconds; None blocks

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"
    loggers: List[LoggerConfig] = Field(default_factory=list)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that the log level is a valid Python logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate that the format is RFC 5424 or RFC 3164."""
        v = v.lower()
        if v not in FORMAT_TYPES:
            raise ValueError(f"Invalid format: {v}. Must be one of {list(FORMAT_TYPES)}")
        return v

    @field_validator("transport")
    @classmethod
    def validate_transport(cls, v: str) -> str:
        """Validate that the transport is UDP, TCP, Unix, or Unix stream."""
        v = v.lower()
        if v not in TRANSPORT_TYPES:
            raise ValueError(
                f"Invalid transport: {v}. Must be one of {list(TRANSPORT_TYPES)}"
            )
        return v

    @field_validator("facility")
    @classmethod
    def validate_facility(cls, v: str) -> str:
        """Validate that the facility names a syslog facility."""
        return Facility.from_name(v).name.lower()

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate that the port is a valid TCP/UDP port."""
        if not 0 < v < 65536:
            raise ValueError(f"Invalid port: {v}. Must be between 1 and 65535")
        return v

    @model_validator(mode="after")
    def validate_format_options(self) -> "Config":
        """Validate that format-specific options are only used with their format."""
        if self.format == "rfc3164" and self.structured_data is not None:
            raise ValueError(
                "Structured data can only be used with the rfc5424 format"
            )
        return self

    @property
    def facility_code(self) -> Facility:
        return Facility.from_name(self.facility)


def load_config(config_path: Optional[Union[str, Path]] = None) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to the configuration file. If None, will look for config.yaml
                   in the current directory and default directories.

    Returns:
        A Config object containing the loaded configuration.

    Raises:
        FileNotFoundError: If the configuration file cannot be found.
        yaml.YAMLError: If the configuration file contains invalid YAML.
    """
    # Default search paths
    search_paths = [
        Path.cwd() / "config.yaml",
        Path.cwd() / "config.yml",
        Path("/etc/ziggiz-courier-dropoff-syslog/config.yaml"),
        Path("/etc/ziggiz-courier-dropoff-syslog/config.yml"),
    ]

    # If config path is provided, try that first
    if config_path:
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")
    else:
        # Try default paths
        for path in search_paths:
            if path.exists():
                config_file = path
                break
        else:
            # No config file found, return default configuration
            logger.debug("No configuration file found, using default configuration")
            return Config()

    # Load YAML configuration
    with open(config_file, "r") as f:
        try:
            config_data = yaml.safe_load(f) or {}
            return Config(**config_data)
        except yaml.YAMLError as e:
            logger.error(
                "Error parsing configuration file",
                extra={"config_file": str(config_file), "error": str(e)},
            )
            raise
        except Exception as e:
            logger.error(
                "Error loading configuration",
                extra={"config_file": str(config_file), "error": str(e)},
            )
            raise


def configure_logging(config: "Config") -> None:
    """
    Configure logging based on the provided configuration.

    Args:
        config: The loaded configuration object.
    """
    # Reset logging configuration
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    # Configure root logger
    level = getattr(logging, config.log_level, logging.INFO)
    formatter = logging.Formatter(config.log_format, datefmt=config.log_date_format)

    # Add console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logging.root.setLevel(level)
    logging.root.addHandler(console_handler)

    # Configure additional loggers from config
    for logger_config in config.loggers:
        named_logger = logging.getLogger(logger_config.name)
        named_logger.setLevel(getattr(logging, logger_config.level, logging.INFO))
        named_logger.propagate = logger_config.propagate


def build_formatter(config: Config) -> SyslogFormatter:
    """
    Create the formatter described by a configuration.

    Raises:
        FieldValidationError: If a header field override is not compliant
        ResolutionError: If an RFC 3164 default cannot be derived
    """
    return FormatterFactory.create_formatter(
        config.format,
        facility=config.facility_code,
        hostname=config.hostname,
        app_name=config.app_name,
        proc_id=config.proc_id,
        with_bom=config.with_bom,
        structured_data=config.structured_data.to_structured_data_config()
        if config.structured_data
        else None,
        tag=config.tag,
        pid=config.pid,
        include_pid=config.include_pid,
        escape_unicode=config.escape_unicode,
    )


def build_transport(config: Config) -> Transport:
    """
    Open the transport described by a configuration.

    Raises:
        TransportError: If the transport cannot be opened
    """
    return TransportFactory.create_transport(
        config.transport,
        host=config.host,
        port=config.port,
        unix_socket_path=config.unix_socket_path,
        timeout=config.timeout,
    )


def build_handler(config: Config, level: int = logging.NOTSET) -> SyslogHandler:
    """
    Create a SyslogHandler from a configuration.

    The formatter is built first so that an invalid header field is reported
    before any socket is opened.
    """
    formatter = build_formatter(config)
    return SyslogHandler(formatter, build_transport(config), level)
