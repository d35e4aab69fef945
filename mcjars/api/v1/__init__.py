from litestar import Router

from mcjars.api.v1.build import BuildController
from mcjars.api.v1.builds import BuildsController
from mcjars.api.v1.script import ScriptController
from mcjars.api.v1.types import TypesController
from mcjars.api.v1.version import VersionController

v1_router = Router(path="/api/v1", route_handlers=[BuildController, BuildsController, ScriptController,
                                                   TypesController, VersionController])
