from .catalog import LedFileCatalog
from .profile import AnalysisProfile
from .records import ComponentRecord, GeometryResult, Position, RunTable
from .results import BinResult, BinStatistic, RadialBinSet, RatioVector

__all__ = [
    "AnalysisProfile",
    "BinResult",
    "BinStatistic",
    "ComponentRecord",
    "GeometryResult",
    "LedFileCatalog",
    "Position",
    "RadialBinSet",
    "RatioVector",
    "RunTable",
]
