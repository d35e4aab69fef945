import posixpath
from enum import Enum

from sqlalchemy.ext.asyncio import AsyncSession

from mcjars.schemas import DownloadStep, UnzipStep, RemoveStep, InstallStep, Installation
from mcjars.services.build_resolver import find_build
from mcjars.services.build_store import get_minecraft_version
from mcjars.services.version_service import DEFAULT_JAVA_VERSION


class ScriptShell(str, Enum):
    BASH = "bash"
    POWERSHELL = "powershell"

    @property
    def echo_prefix(self) -> str:
        return "echo" if self == ScriptShell.BASH else "Write-Host"


def _filter_echo(lines: list[str], shell: ScriptShell, echo: bool) -> str:
    if not echo:
        lines = [line for line in lines if not line.lstrip().startswith(shell.echo_prefix)]
    return "\n".join(lines)


def _bash_steps(groups: list[list[InstallStep]]) -> list[str]:
    lines = []
    for group in groups:
        lines.append("")
        for step in group:
            if isinstance(step, RemoveStep):
                lines += [f'echo "Removing {step.location}"', f"rm -rf {step.location}"]
            elif isinstance(step, DownloadStep):
                lines += [
                    f'echo "Downloading {step.file}"',
                    f"mkdir -p {posixpath.dirname(step.file) or '.'}",
                    f"rm -f {step.file}",
                    f"curl -s -o {step.file} '{step.url}'&",
                ]
            elif isinstance(step, UnzipStep):
                lines += [
                    f'echo "Unzipping {step.file}"',
                    f"mkdir -p {step.location}",
                    f"unzip -o {step.file} -d {step.location}&",
                ]
        # Steps of a group run in the background, the next group waits for them
        lines.append("wait")
    return lines


def _powershell_steps(groups: list[list[InstallStep]]) -> list[str]:
    lines = []
    for group in groups:
        lines += ["", "Invoke-Command {"]
        for step in group:
            if isinstance(step, RemoveStep):
                lines += [f'  Write-Host "Removing {step.location}"', f"  Remove-Item -Recurse -Force {step.location}"]
            elif isinstance(step, DownloadStep):
                lines += [
                    f'  Write-Host "Downloading {step.file}"',
                    f"  New-Item -ItemType Directory -Force {posixpath.dirname(step.file) or '.'}",
                    f"  Invoke-WebRequest -Uri '{step.url}' -OutFile {step.file}",
                ]
            elif isinstance(step, UnzipStep):
                lines += [
                    f'  Write-Host "Unzipping {step.file}"',
                    f"  New-Item -ItemType Directory -Force {step.location}",
                    f"  Expand-Archive -Path {step.file} -DestinationPath {step.location}",
                ]
        lines.append("}")
    return lines


def render_missing_build_script(shell: ScriptShell, echo: bool = True) -> str:
    if shell == ScriptShell.BASH:
        lines = ["#!/bin/bash", "", 'echo "Build not found"', "exit 1"]
    else:
        lines = ['Write-Host "Build not found"', "exit 1"]
    return _filter_echo(lines, shell, echo)


def render_install_script(shell: ScriptShell, installation: list, java: int | None = None, echo: bool = True) -> str:
    """
    Render an install script for a build's installation groups.
    ``installation`` is the raw JSON stored on the build; ``java`` falls back to the default Java version.
    """
    groups = Installation.validate_python(installation)
    java = java or DEFAULT_JAVA_VERSION

    if shell == ScriptShell.BASH:
        lines = [
            "#!/bin/bash",
            f"export JAVA_VERSION={java}",
            "",
            'echo "Installing Server"',
            *_bash_steps(groups),
            "",
            'echo "Installation complete"',
            f'echo "Use Java version: {java}"',
            "exit 0",
        ]
    else:
        lines = [
            'Write-Host "Installing Server"',
            f"$env:JAVA_VERSION = {java}",
            *_powershell_steps(groups),
            "",
            'Write-Host "Installation complete"',
            f'Write-Host "Use Java version: {java}"',
            "exit 0",
        ]
    return _filter_echo(lines, shell, echo)


async def get_script_source(token: str, db: AsyncSession) -> dict | None:
    """Installation groups and Java version of the build behind ``token``, None when it does not resolve."""
    build = await find_build(token, db)
    if build is None:
        return None

    java = None
    if build.version_id is not None:
        minecraft_version = await get_minecraft_version(build.version_id, db)
        java = minecraft_version.java if minecraft_version is not None else None

    return {"installation": build.installation, "java": java or DEFAULT_JAVA_VERSION}
