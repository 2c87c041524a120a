# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# OpenTelemetry setup for Ziggiz Courier Dropoff Syslog
#
# Transports wrap every send in a span obtained from get_tracer(). Until
# configure_tracing() (or the host application) installs a tracer provider,
# the OpenTelemetry API hands out no-op tracers, so the spans cost nothing.

# Standard library imports
from typing import Optional

# Third-party imports
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.trace import Tracer

SERVICE_NAME = "ziggiz-courier-dropoff-syslog"


def configure_tracing(
    console: bool = False, exporter: Optional[SpanExporter] = None
) -> TracerProvider:
    """
    Install an SDK tracer provider for this process.

    Args:
        console: Export spans to the console (for development/demo purposes)
        exporter: An additional span exporter, e.g. an OTLP exporter

    Returns:
        The installed tracer provider
    """
    resource = Resource.create({"service.name": SERVICE_NAME})
    tracer_provider = TracerProvider(resource=resource)
    if console:
        tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    if exporter is not None:
        tracer_provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(tracer_provider)
    return tracer_provider


def get_tracer() -> Tracer:
    return trace.get_tracer(SERVICE_NAME)
