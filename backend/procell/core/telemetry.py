"""
ProCell OpenTelemetry Setup

Tracer provider lifecycle for the host application.

Cache services always create spans through ``opentelemetry.trace``; until
``OpenTelemetryManager.initialize`` installs an SDK provider those spans
are no-ops, so library code never depends on telemetry being configured.
"""

import logging
import os
import socket
from typing import Any, Dict, Optional

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.semconv.resource import ResourceAttributes

from .config import Settings, get_settings

logger = logging.getLogger(__name__)


class OpenTelemetryManager:
    """
    Manages OpenTelemetry tracing lifecycle.

    Handles initialization and shutdown with graceful degradation: a
    failure to set up telemetry is logged and never stops the host.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._initialized = False
        self._tracer_provider: Optional[TracerProvider] = None
        self._settings = settings or get_settings()

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self, app: Any = None) -> bool:
        """
        Initialize tracing and, when given, instrument a FastAPI app.

        Returns:
            True if initialization successful, False otherwise
        """
        if self._initialized:
            logger.warning("OpenTelemetry already initialized")
            return True

        if not self._settings.OTEL_ENABLED:
            logger.info("OpenTelemetry disabled, spans stay no-op")
            return False

        try:
            resource = self._create_resource()
            self._tracer_provider = TracerProvider(resource=resource)
            self._tracer_provider.add_span_processor(
                BatchSpanProcessor(self._create_span_exporter())
            )
            trace.set_tracer_provider(self._tracer_provider)

            if app is not None:
                from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

                FastAPIInstrumentor.instrument_app(app)

            self._initialized = True
            logger.info(
                "OpenTelemetry tracing initialized",
                extra={
                    "service_name": self._settings.OTEL_SERVICE_NAME,
                    "endpoint": self._settings.OTEL_EXPORTER_OTLP_ENDPOINT or "console",
                },
            )
            return True

        except Exception as e:
            logger.error(
                f"Failed to initialize OpenTelemetry tracing: {e}", exc_info=True
            )
            return False

    def shutdown(self) -> None:
        """Flush and shut down the tracer provider."""
        if not self._initialized:
            return

        try:
            if self._tracer_provider:
                self._tracer_provider.shutdown()
            self._initialized = False
            logger.info("OpenTelemetry tracing shutdown completed")
        except Exception as e:
            logger.error(f"Error during OpenTelemetry shutdown: {e}", exc_info=True)

    def _create_resource(self) -> Resource:
        return Resource.create(
            {
                ResourceAttributes.SERVICE_NAME: self._settings.OTEL_SERVICE_NAME,
                ResourceAttributes.SERVICE_VERSION: self._settings.OTEL_SERVICE_VERSION,
                ResourceAttributes.DEPLOYMENT_ENVIRONMENT: self._settings.ENVIRONMENT,
                ResourceAttributes.HOST_NAME: socket.gethostname(),
                ResourceAttributes.PROCESS_PID: os.getpid(),
            }
        )

    def _create_span_exporter(self) -> SpanExporter:
        endpoint = self._settings.OTEL_EXPORTER_OTLP_ENDPOINT
        if not endpoint:
            return ConsoleSpanExporter()

        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
            OTLPSpanExporter,
        )

        return OTLPSpanExporter(endpoint=endpoint, insecure=True)

    def get_telemetry_health(self) -> Dict[str, Any]:
        return {
            "status": "healthy" if self._initialized else "disabled",
            "initialized": self._initialized,
            "service_name": self._settings.OTEL_SERVICE_NAME,
            "collector_endpoint": self._settings.OTEL_EXPORTER_OTLP_ENDPOINT or None,
        }
