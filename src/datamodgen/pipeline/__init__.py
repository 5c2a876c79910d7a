from .registry import ResourceRegistry, RunRegistries
from .closure import resolve_closure
from .scanner import References, scan_block_model, scan_references, scan_trigger_sheet
from .paths import plan_lang_path, plan_path
from .emitter import Emitter, clear_output
from .driver import ModWriter, Stage, WriteResult

__all__ = [
    "ResourceRegistry",
    "RunRegistries",
    "resolve_closure",
    "References",
    "scan_block_model",
    "scan_references",
    "scan_trigger_sheet",
    "plan_path",
    "plan_lang_path",
    "Emitter",
    "clear_output",
    "ModWriter",
    "Stage",
    "WriteResult",
]
