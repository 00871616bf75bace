"""Composition root: the only place that instantiates concrete adapters."""

from llm_bridge.application.ports.llm_client_port import LLMClientPort
from llm_bridge.application.ports.sandbox_port import SandboxPort
from llm_bridge.application.ports.telemetry_port import TelemetryPort
from llm_bridge.application.use_cases.ask_model import AskModel
from llm_bridge.config.settings import AppSettings
from llm_bridge.domain.errors import ValidationError
from llm_bridge.domain.models import Endpoint
from llm_bridge.infrastructure.llm.copilot_cli_adapter import CopilotCLIAdapter
from llm_bridge.infrastructure.sandbox.docker_sandbox import DockerSandboxRunner
from llm_bridge.infrastructure.telemetry.otel_adapter import OpenTelemetryAdapter, OtelConfig

SUPPORTED_PROVIDERS = ("github",)


def build_endpoint(settings: AppSettings) -> Endpoint:
    if settings.llm_provider not in SUPPORTED_PROVIDERS:
        raise ValidationError(
            f"Unknown LLM provider '{settings.llm_provider}'. "
            f"Available: {', '.join(SUPPORTED_PROVIDERS)}"
        )
    if not settings.github_token:
        raise ValidationError("GITHUB_TOKEN must be set for the github provider")
    return Endpoint(
        credential=settings.github_token,
        model=settings.llm_model,
        provider=settings.llm_provider,
    )


def build_sandbox(settings: AppSettings) -> SandboxPort:
    """Provision the Copilot CLI sandbox image.

    Runs `docker build` once; docker's layer cache makes repeat builds of the
    same pinned version cheap.
    """
    return DockerSandboxRunner.provision(
        npm_package=settings.copilot_npm_package,
        version=settings.copilot_cli_version,
        base_image=settings.sandbox_image,
        workdir=settings.sandbox_workdir,
        network=settings.sandbox_network,
        docker_bin=settings.docker_bin or None,
    )


def build_telemetry(settings: AppSettings) -> TelemetryPort:
    """Build the OpenTelemetry adapter.

    With telemetry disabled the SDK is not installed and the OpenTelemetry API
    falls back to its no-op providers.
    """
    return OpenTelemetryAdapter(
        OtelConfig(
            otlp_endpoint=settings.otlp_endpoint or None,
            environment=settings.telemetry_environment,
            enable_console=settings.telemetry_console,
            install_sdk=settings.telemetry_enabled,
        )
    )


def build_llm_client(settings: AppSettings, sandbox: SandboxPort | None = None) -> LLMClientPort:
    endpoint = build_endpoint(settings)
    return CopilotCLIAdapter(
        endpoint=endpoint,
        sandbox=sandbox if sandbox is not None else build_sandbox(settings),
        workdir=settings.sandbox_workdir,
    )


def build_ask_use_case(settings: AppSettings | None = None) -> AskModel:
    return AskModel(client=build_llm_client(settings or AppSettings()))
