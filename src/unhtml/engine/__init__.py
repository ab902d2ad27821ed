"""Engine subpackage: the decode engine proper.

Public API:
- TargetKind, classify, zero_value, Runes: the closed set of target kinds
- Slot, Ref, root_slot: typed locations the engine writes into
- resolve, peek, Resolution: indirection resolution
- materialize: scalar materialization
- bind_struct: struct field binding
- bind_many: multi-node collection
- DecodeSession, keep_first: per-call state and first-error-wins merging
"""

from unhtml.engine.binder import bind_struct
from unhtml.engine.collector import bind_many
from unhtml.engine.kinds import Runes, TargetKind, classify, zero_value
from unhtml.engine.resolver import Resolution, peek, resolve
from unhtml.engine.scalars import materialize
from unhtml.engine.session import DecodeSession, keep_first
from unhtml.engine.slots import Ref, Slot, root_slot

__all__ = [
    "DecodeSession",
    "Ref",
    "Resolution",
    "Runes",
    "Slot",
    "TargetKind",
    "bind_many",
    "bind_struct",
    "classify",
    "keep_first",
    "materialize",
    "peek",
    "resolve",
    "root_slot",
    "zero_value",
]
