"""Docker-backed sandbox runner.

Commands run via `docker run --rm` in an image provisioned once from a base
image plus a pinned npm package. Secrets are passed by name (`-e KEY`) and
resolved from the docker client's environment, so they never appear on the
command line.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import threading
import uuid
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from llm_bridge.application.ports.sandbox_port import ExecResult, SandboxPort
from llm_bridge.domain.errors import ExecutionCancelled, ExecutionError

logger = logging.getLogger(__name__)

DEFAULT_BASE_IMAGE = "node:24-bookworm-slim"
IMAGE_REPOSITORY = "llm-bridge/copilot-cli"


def render_dockerfile(base_image: str, npm_package: str, version: str, workdir: str) -> str:
    return (
        f"FROM {base_image}\n"
        f"RUN npm install -g {npm_package}@{version}\n"
        f"WORKDIR {workdir}\n"
    )


@dataclass
class DockerSandboxRunner(SandboxPort):
    image: str
    network: str = "bridge"
    docker_bin: str = "docker"
    poll_interval_s: float = 0.1

    @classmethod
    def provision(
        cls,
        *,
        npm_package: str,
        version: str,
        base_image: str = DEFAULT_BASE_IMAGE,
        workdir: str = "/workspace",
        network: str = "bridge",
        docker_bin: str | None = None,
    ) -> DockerSandboxRunner:
        """Build (or reuse from docker's layer cache) the tool image and return a runner for it."""
        docker = docker_bin or shutil.which("docker") or "docker"
        tag = f"{IMAGE_REPOSITORY}:{version}"
        dockerfile = render_dockerfile(base_image, npm_package, version, workdir)

        logger.info("provisioning sandbox image %s from %s", tag, base_image)
        try:
            proc = subprocess.run(
                [docker, "build", "--tag", tag, "-"],
                input=dockerfile,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as ex:
            raise ExecutionError(f"failed to start docker build: {ex}") from ex
        if proc.returncode != 0:
            raise ExecutionError(
                f"sandbox provisioning failed for {tag}",
                exit_code=proc.returncode,
                stderr=proc.stderr or "",
            )
        return cls(image=tag, network=network, docker_bin=docker)

    def _docker_prefix(self, name: str, env_keys: Sequence[str], workdir: str | None) -> list[str]:
        args: list[str] = [self.docker_bin, "run", "--rm", "--init", "--name", name]
        if workdir:
            args.extend(["--workdir", workdir])
        if self.network:
            args.extend(["--network", self.network])
        for key in env_keys:
            if not key:
                continue
            args.extend(["-e", key])
        args.append(self.image)
        return args

    def run(
        self,
        command: Sequence[str],
        env: Mapping[str, str] | None = None,
        workdir: str | None = None,
        cancel: threading.Event | None = None,
    ) -> ExecResult:
        env = dict(env or {})
        name = f"llm-bridge-{uuid.uuid4().hex[:12]}"
        args = [*self._docker_prefix(name, list(env), workdir), *command]

        try:
            proc = subprocess.Popen(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                # The CLI may emit arbitrary bytes; undecodable ones become U+FFFD
                encoding="utf-8",
                errors="replace",
                env={**os.environ, **env},
            )
        except OSError as ex:
            raise ExecutionError(f"failed to start sandbox: {ex}") from ex

        stdout, stderr = self._wait(proc, name, cancel)
        tool = command[0] if command else ""
        if proc.returncode != 0:
            raise ExecutionError(
                f"sandboxed command {tool!r} failed",
                exit_code=proc.returncode,
                stderr=stderr or "",
            )
        return ExecResult(stdout=stdout or "", stderr=stderr or "")

    def _wait(
        self, proc: subprocess.Popen[str], name: str, cancel: threading.Event | None
    ) -> tuple[str, str]:
        if cancel is None:
            return proc.communicate()

        while True:
            if cancel.is_set():
                self._abort(proc, name)
                raise ExecutionCancelled("sandbox execution cancelled", exit_code=proc.returncode)
            try:
                return proc.communicate(timeout=self.poll_interval_s)
            except subprocess.TimeoutExpired:
                continue

    def _abort(self, proc: subprocess.Popen[str], name: str) -> None:
        logger.info("cancelling sandbox container %s", name)
        # Killing the docker client alone leaves the container running.
        subprocess.run(
            [self.docker_bin, "rm", "--force", name],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
        proc.kill()
        proc.communicate()
