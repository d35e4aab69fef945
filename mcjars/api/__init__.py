from mcjars.api.v1 import v1_router
from mcjars.api.v2 import v2_router
