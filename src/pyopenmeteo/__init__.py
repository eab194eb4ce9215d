"""pyopenmeteo - Open-Meteo weather sync into a hierarchical state tree."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyopenmeteo")
except PackageNotFoundError:
    __version__ = "0+local"
from pyopenmeteo._cache import ObjectCache, SyncState
from pyopenmeteo.astro import AstralMoonCalculator, MoonCalculator, MoonTimes
from pyopenmeteo.client import OpenMeteoClient
from pyopenmeteo.config import LocationConfig, WeatherConfig, slugify
from pyopenmeteo.controller import SnapshotFetcher, SyncCycleController
from pyopenmeteo.exceptions import (
    InvalidDataPointIdError,
    MalformedFieldError,
    MeteoConfigError,
    MeteoError,
    MeteoStoreError,
    MeteoTransportError,
)
from pyopenmeteo.ingestion.sync import TreeSynchronizer
from pyopenmeteo.models import (
    DataPoint,
    DataPointId,
    DataPointMetadata,
    Snapshot,
)
from pyopenmeteo.state.reconcile import plan_deletions, reconcile
from pyopenmeteo.state.store import InMemoryObjectStore, ObjectStore
from pyopenmeteo.translations import Translator

__all__ = [
    "__version__",
    "AstralMoonCalculator",
    "DataPoint",
    "DataPointId",
    "DataPointMetadata",
    "InMemoryObjectStore",
    "InvalidDataPointIdError",
    "LocationConfig",
    "MalformedFieldError",
    "MeteoConfigError",
    "MeteoError",
    "MeteoStoreError",
    "MeteoTransportError",
    "MoonCalculator",
    "MoonTimes",
    "ObjectCache",
    "ObjectStore",
    "OpenMeteoClient",
    "Snapshot",
    "SnapshotFetcher",
    "SyncCycleController",
    "SyncState",
    "Translator",
    "TreeSynchronizer",
    "WeatherConfig",
    "plan_deletions",
    "reconcile",
    "slugify",
]
