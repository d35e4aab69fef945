from datetime import timedelta

from litestar import get, Controller, Response, MediaType
from litestar.di import Provide
from sqlalchemy.ext.asyncio import AsyncSession

from mcjars.core import cache
from mcjars.db.session import get_db_session
from mcjars.services.script_service import ScriptShell, get_script_source, render_install_script, \
    render_missing_build_script


class ScriptController(Controller):
    """Install scripts always answer 200; a missing build yields a script that exits with 1."""
    path = "/script"
    tags = ["Scripts"]
    dependencies = {
        "db": Provide(get_db_session),
    }

    async def _render(self, build: str, shell: ScriptShell, echo: bool, db: AsyncSession) -> Response[str]:
        token = build.strip().lower()
        source = await cache.use(f"script::{token}", lambda: get_script_source(token, db), timedelta(hours=6))

        if source is None:
            script = render_missing_build_script(shell, echo)
        else:
            script = render_install_script(shell, source["installation"], source["java"], echo)
        return Response(script, media_type=MediaType.TEXT)

    @get("/{build:str}/bash")
    async def bash_script(self, build: str, db: AsyncSession, echo: bool = True) -> Response[str]:
        return await self._render(build, ScriptShell.BASH, echo, db)

    @get("/{build:str}/powershell")
    async def powershell_script(self, build: str, db: AsyncSession, echo: bool = True) -> Response[str]:
        return await self._render(build, ScriptShell.POWERSHELL, echo, db)
