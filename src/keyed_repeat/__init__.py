"""Keyed list reconciliation for rendered output."""

# Entry point
from keyed_repeat.repeat import Repeat as Repeat
from keyed_repeat.repeat import repeat as repeat

# Configuration
from keyed_repeat.options import RepeatOptions as RepeatOptions

# Results
from keyed_repeat.results import Key as Key
from keyed_repeat.results import RenderResult as RenderResult
from keyed_repeat.results import build_results as build_results

# Reconciliation
from keyed_repeat.keymap import key_to_index_map as key_to_index_map
from keyed_repeat.lis import lis as lis
from keyed_repeat.lis import old_index_lis as old_index_lis
from keyed_repeat.reconciler import Reconciler as Reconciler
from keyed_repeat.reconciler import reconcile as reconcile

# Parts, containers and caches
from keyed_repeat.cache import BindingSiteCache as BindingSiteCache
from keyed_repeat.cache import default_cache as default_cache
from keyed_repeat.container import Container as Container
from keyed_repeat.container import MemoryContainer as MemoryContainer
from keyed_repeat.container import Part as Part
from keyed_repeat.operations import Operation as Operation
from keyed_repeat.operations import count_operations as count_operations
from keyed_repeat.pool import ReusePool as ReusePool

# Errors
from keyed_repeat.errors import ContainerError as ContainerError
from keyed_repeat.errors import DuplicateKeyError as DuplicateKeyError
from keyed_repeat.errors import OptionsError as OptionsError
from keyed_repeat.errors import RepeatError as RepeatError

from keyed_repeat.version import __version__ as __version__
