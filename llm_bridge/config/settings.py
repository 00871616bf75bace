"""Application settings with environment-driven configuration.

This is the ONLY place where environment variables are read; every other
layer receives settings via dependency injection.
"""

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class AppSettings:
    """Application settings loaded from environment variables."""

    # ===== LLM Endpoint Configuration =====
    llm_provider: str = field(default_factory=lambda: os.getenv("LLM_PROVIDER", "github").lower())
    # Supported: "github"

    llm_model: str = field(default_factory=lambda: os.getenv("LLM_MODEL", "github-gpt-5"))
    # Alias prefixes (github-, gh/, ghcp-, ...) are stripped before reaching the CLI

    github_token: str = field(default_factory=lambda: os.getenv("GITHUB_TOKEN", ""), repr=False)

    # ===== Sandbox Configuration =====
    copilot_cli_version: str = field(
        default_factory=lambda: os.getenv("COPILOT_CLI_VERSION", "0.0.353")
    )
    copilot_npm_package: str = field(
        default_factory=lambda: os.getenv("COPILOT_NPM_PACKAGE", "@github/copilot")
    )
    sandbox_image: str = field(
        default_factory=lambda: os.getenv("SANDBOX_IMAGE", "node:24-bookworm-slim")
    )
    sandbox_workdir: str = field(default_factory=lambda: os.getenv("SANDBOX_WORKDIR", "/workspace"))
    sandbox_network: str = field(default_factory=lambda: os.getenv("SANDBOX_NETWORK", "bridge"))
    # The CLI talks to GitHub, so "none" only works behind a proxy sidecar

    docker_bin: str = field(default_factory=lambda: os.getenv("DOCKER_BIN", ""))
    # Empty = resolve "docker" from PATH

    # ===== Telemetry Configuration =====
    telemetry_enabled: bool = field(
        default_factory=lambda: os.getenv("TELEMETRY_ENABLED", "true").lower() == "true"
    )
    otlp_endpoint: str = field(default_factory=lambda: os.getenv("OTLP_ENDPOINT", ""))
    # Empty string = no OTLP export

    telemetry_console: bool = field(
        default_factory=lambda: os.getenv("TELEMETRY_CONSOLE", "false").lower() == "true"
    )
    telemetry_environment: str = field(
        default_factory=lambda: os.getenv("TELEMETRY_ENVIRONMENT", "production")
    )

    # ===== Logging =====
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
