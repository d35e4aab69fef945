from mcjars.schemas.build import BuildView, DownloadStep, UnzipStep, RemoveStep, InstallStep, Installation
from mcjars.schemas.search import BuildSearch, BuildSearchBatch, HashSearch, MAX_BATCH_SIZE
from mcjars.schemas.version import FamilyVersion, MinecraftVersionView, VersionListing
from mcjars.schemas.stats import SizeSummary, SizeStats, BuildStats, DailyBuildStats, GlobalStats
