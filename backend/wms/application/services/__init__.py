from .batch_selector import BatchSelector
from .csv_export import export_csv, export_filename
from .demo_seeder import DemoSeeder
from .data_loader import DataLoader, LoadResult, LoadSource, SourceOutcome
from .filter_engine import Debouncer, FilterEngine
from .list_manager import ListManager
from .list_statistics import ListStatistics, compute_statistics
from .mutation_dispatcher import MutationDispatcher, MutationResult
from .paginator import PageWindow, Paginator
from .sort_engine import SortEngine, compare_values

__all__ = [
    "BatchSelector",
    "export_csv",
    "export_filename",
    "DemoSeeder",
    "DataLoader",
    "LoadResult",
    "LoadSource",
    "SourceOutcome",
    "Debouncer",
    "FilterEngine",
    "ListManager",
    "ListStatistics",
    "compute_statistics",
    "MutationDispatcher",
    "MutationResult",
    "PageWindow",
    "Paginator",
    "SortEngine",
    "compare_values",
]
