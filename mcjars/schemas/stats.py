from dataclasses import dataclass


@dataclass
class SizeSummary:
    jar: float
    zip: float


@dataclass
class SizeStats:
    total: SizeSummary
    average: SizeSummary


@dataclass
class BuildStats:
    builds: int
    size: SizeStats


@dataclass
class DailyBuildStats:
    day: int
    builds: int
    size: SizeStats


@dataclass
class GlobalStats:
    builds: int
    hashes: int
    total: SizeSummary
