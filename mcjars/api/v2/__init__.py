from litestar import Router

from mcjars.api.v2.build import BuildSearchController
from mcjars.api.v2.builds import BuildsController
from mcjars.api.v2.stats import StatsController

v2_router = Router(path="/api/v2", route_handlers=[BuildSearchController, BuildsController, StatsController])
