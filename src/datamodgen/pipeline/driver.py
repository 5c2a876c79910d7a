"""Write pipeline: discover everything a mod needs and emit it once.

Stages run strictly in order (:class:`Stage`). Blocks and block-state
generators seed the block-model and trigger-sheet closures; models and
sheets then pull in the textures, sounds and loot tables they reference.
Shared resources are written once per run, tracked by identity. The first
entity that fails aborts the run with an :class:`EntityWriteError` naming
it; files written before that point are left in place.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path, PurePosixPath
from typing import Any, Callable, Dict, Iterator, List, Optional

from ..errors import entity_error
from ..logging import get_logger
from ..model.block_model import BlockModel
from ..model.lang import LangMap, Language
from ..model.mod import Mod
from ..model.trigger_sheet import TriggerSheet
from ..reporting import get_reporter, task
from .closure import resolve_closure
from .emitter import Emitter, clear_output
from .paths import BLOCK_ROLE, ITEM_ROLE, LANG_SECTIONS, plan_lang_path, plan_path
from .registry import RunRegistries
from .scanner import scan_block_model, scan_trigger_sheet

__all__ = ["Stage", "ModWriter", "WriteResult"]


class Stage(Enum):
    INIT = auto()
    WRITE_BLOCKS = auto()
    WRITE_BLOCK_STATE_GENERATORS = auto()
    RESOLVE_MODEL_CLOSURE = auto()
    WRITE_MODELS = auto()
    RESOLVE_TRIGGER_CLOSURE = auto()
    WRITE_TRIGGERS = auto()
    WRITE_ITEMS = auto()
    WRITE_RECIPES = auto()
    WRITE_LOCALIZATION = auto()
    DONE = auto()


# Result count key -> label used in error messages.
KIND_LABELS: Dict[str, str] = {
    "blocks": "block",
    "block_state_generators": "block state generator",
    "block_models": "block model",
    "block_textures": "block texture",
    "trigger_sheets": "trigger sheet",
    "sounds": "block sound",
    "loot_tables": "block loot table",
    "items": "item",
    "item_textures": "item texture",
    "crafting_recipes": "crafting recipe",
    "furnace_recipes": "furnace recipe",
    "languages": "language",
}


@dataclass(slots=True)
class WriteResult:
    mod_id: str
    output_dir: Path
    files: List[PurePosixPath]
    bytes_written: int
    counts: Dict[str, int]
    dry_run: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mod": self.mod_id,
            "output_dir": str(self.output_dir),
            "dry_run": self.dry_run,
            "files": [str(p) for p in self.files],
            "bytes": self.bytes_written,
            "counts": dict(self.counts),
        }


@dataclass(slots=True)
class _Run:
    emitter: Emitter
    lang: LangMap
    registries: RunRegistries = field(default_factory=RunRegistries)
    used_models: Dict[BlockModel, None] = field(default_factory=dict)
    used_sheets: Dict[TriggerSheet, None] = field(default_factory=dict)
    models: List[BlockModel] = field(default_factory=list)
    sheets: List[TriggerSheet] = field(default_factory=list)
    counts: Dict[str, int] = field(
        default_factory=lambda: dict.fromkeys(KIND_LABELS, 0)
    )


@contextmanager
def _entity_context(count_key: str, entity_id: str) -> Iterator[None]:
    try:
        yield
    except Exception as e:
        raise entity_error(KIND_LABELS[count_key], entity_id) from e


class ModWriter:
    def __init__(self, mod: Mod, minify_json: bool = False) -> None:
        self.mod = mod
        self.minify_json = minify_json
        self.stage = Stage.INIT

    def _stages(self) -> List[tuple[Stage, Callable[[_Run], None]]]:
        return [
            (Stage.WRITE_BLOCKS, self._write_blocks),
            (Stage.WRITE_BLOCK_STATE_GENERATORS, self._write_generators),
            (Stage.RESOLVE_MODEL_CLOSURE, self._resolve_models),
            (Stage.WRITE_MODELS, self._write_models),
            (Stage.RESOLVE_TRIGGER_CLOSURE, self._resolve_sheets),
            (Stage.WRITE_TRIGGERS, self._write_triggers),
            (Stage.WRITE_ITEMS, self._write_items),
            (Stage.WRITE_RECIPES, self._write_recipes),
            (Stage.WRITE_LOCALIZATION, self._write_localization),
        ]

    def write(
        self,
        output_root: str | Path,
        keep_old_folder: bool = False,
        *,
        dry_run: bool = False,
    ) -> WriteResult:
        logger = get_logger()
        directory = (Path(output_root) / self.mod.id).resolve()
        if not keep_old_folder and not dry_run:
            clear_output(directory)
        run = _Run(
            emitter=Emitter(
                directory, minify_json=self.minify_json, dry_run=dry_run
            ),
            lang=self.mod.lang_map.copy(),
        )
        self.stage = Stage.INIT
        for stage, handler in self._stages():
            self.stage = stage
            logger.debug("stage %s", stage.name.lower())
            handler(run)
        self.stage = Stage.DONE

        emitter = run.emitter
        result = WriteResult(
            mod_id=self.mod.id,
            output_dir=directory,
            files=list(emitter.written),
            bytes_written=emitter.bytes_written,
            counts=dict(run.counts),
            dry_run=dry_run,
        )
        logger.info(
            "%s mod %s: %d files, %d bytes -> %s",
            "Planned" if dry_run else "Wrote",
            self.mod.id,
            len(result.files),
            result.bytes_written,
            directory,
        )
        get_reporter().status(
            f"{'Plan' if dry_run else 'Write'} summary: "
            + f"files={len(result.files)} bytes={result.bytes_written} "
            + f"models={run.counts['block_models']} "
            + f"textures={run.counts['block_textures'] + run.counts['item_textures']} "
            + f"sheets={run.counts['trigger_sheets']}"
        )
        return result

    # Emission helpers -------------------------------------------------------
    def _emit(
        self,
        run: _Run,
        count_key: str,
        entity_id: str,
        entity: Any,
        role: Optional[str] = None,
        payload: Optional[Callable[[], Any]] = None,
    ) -> None:
        with _entity_context(count_key, entity_id):
            path = plan_path(entity, role)
            data = payload() if payload is not None else entity.serialize()
            run.emitter.emit(path, data)
        run.counts[count_key] += 1

    def _advance(self, task_id: str, entity_id: str) -> None:
        get_reporter().advance(task_id, current_item=entity_id)

    # Stages -----------------------------------------------------------------
    def _write_blocks(self, run: _Run) -> None:
        blocks = self.mod.blocks
        with task("write.blocks", "Blocks", total=len(blocks)) as stats:
            for block in blocks:
                block_id = block.get_block_id()
                with _entity_context("blocks", block_id):
                    for state in block.get_states():
                        if isinstance(state.model, BlockModel):
                            run.used_models.setdefault(state.model)
                        if isinstance(state.trigger_sheet, TriggerSheet):
                            run.used_sheets.setdefault(state.trigger_sheet)
                        if state.lang_key is not None:
                            run.lang.add_block_key(state.lang_key)
                self._emit(run, "blocks", block_id, block)
                self._advance("write.blocks", block_id)
            stats["files"] = run.counts["blocks"]

    def _write_generators(self, run: _Run) -> None:
        generators = self.mod.block_state_generators
        with task(
            "write.generators", "Block state generators", total=len(generators)
        ) as stats:
            for generator in generators:
                gen_id = str(generator.id)
                self._emit(run, "block_state_generators", gen_id, generator)
                for entry in generator.generators:
                    model = entry.used_model()
                    if model is not None:
                        run.used_models.setdefault(model)
                    sheet = entry.used_trigger_sheet()
                    if sheet is not None:
                        run.used_sheets.setdefault(sheet)
                self._advance("write.generators", gen_id)
            stats["files"] = run.counts["block_state_generators"]

    def _resolve_models(self, run: _Run) -> None:
        with task("resolve.models", "Resolve block models") as stats:
            run.models = resolve_closure(
                run.used_models, self.mod.block_models, kind=BlockModel
            )
            stats["discovered"] = len(run.models)
        get_reporter().verbose(
            f"Closure summary: kind=block_model seeds={len(run.used_models)} "
            f"total={len(run.models)}"
        )

    def _write_models(self, run: _Run) -> None:
        registry = run.registries.block_textures
        skipped = 0
        with task("write.models", "Block models", total=len(run.models)) as stats:
            for model in run.models:
                for texture in scan_block_model(model).textures:
                    if not registry.mark_written(texture):
                        skipped += 1
                        continue
                    if not texture.is_embedded:
                        continue
                    self._emit(
                        run,
                        "block_textures",
                        str(texture.get_as_block_texture_id(self.mod)),
                        texture,
                        BLOCK_ROLE,
                        texture.create_texture_stream,
                    )
                model_id = str(model.get_block_model_id())
                self._emit(run, "block_models", model_id, model)
                self._advance("write.models", model_id)
            stats["files"] = run.counts["block_models"] + run.counts["block_textures"]
            stats["skipped"] = skipped

    def _resolve_sheets(self, run: _Run) -> None:
        with task("resolve.triggers", "Resolve trigger sheets") as stats:
            run.sheets = resolve_closure(
                run.used_sheets, self.mod.trigger_sheets, kind=TriggerSheet
            )
            stats["discovered"] = len(run.sheets)
        get_reporter().verbose(
            f"Closure summary: kind=trigger_sheet seeds={len(run.used_sheets)} "
            f"total={len(run.sheets)}"
        )

    def _write_triggers(self, run: _Run) -> None:
        sounds = run.registries.sounds
        loot_tables = run.registries.loot_tables
        with task(
            "write.triggers", "Trigger sheets", total=len(run.sheets)
        ) as stats:
            for sheet in run.sheets:
                sheet_id = sheet.get_trigger_sheet_id()
                self._emit(run, "trigger_sheets", sheet_id, sheet)
                refs = scan_trigger_sheet(sheet)
                for sound in refs.sounds:
                    if not sounds.mark_written(sound) or not sound.is_embedded:
                        continue
                    self._emit(
                        run,
                        "sounds",
                        str(sound.get_as_block_sound_id(self.mod)),
                        sound,
                        payload=sound.create_ogg_stream,
                    )
                for loot in refs.loot_tables:
                    if loot_tables.mark_written(loot):
                        self._emit(run, "loot_tables", loot.get_loot_id(), loot)
                self._advance("write.triggers", sheet_id)
            stats["files"] = sum(
                run.counts[k] for k in ("trigger_sheets", "sounds", "loot_tables")
            )

    def _write_items(self, run: _Run) -> None:
        registry = run.registries.item_textures
        items = self.mod.items
        with task("write.items", "Items", total=len(items)) as stats:
            for item in items:
                item_id = item.get_item_id()
                if item.lang_key is not None:
                    with _entity_context("items", item_id):
                        run.lang.add_item_key(item.lang_key)
                texture = item.texture
                if (
                    texture is not None
                    and registry.mark_written(texture)
                    and texture.is_embedded
                ):
                    self._emit(
                        run,
                        "item_textures",
                        str(texture.get_as_item_texture_id(self.mod)),
                        texture,
                        ITEM_ROLE,
                        texture.create_texture_stream,
                    )
                self._emit(run, "items", item_id, item)
                self._advance("write.items", item_id)
            stats["files"] = run.counts["items"] + run.counts["item_textures"]

    def _write_recipes(self, run: _Run) -> None:
        crafting = self.mod.crafting
        total = len(crafting.crafting_recipes) + len(crafting.furnace_recipes)
        with task("write.recipes", "Recipes", total=total) as stats:
            for recipe in crafting.crafting_recipes:
                self._emit(run, "crafting_recipes", str(recipe.id), recipe)
                self._advance("write.recipes", str(recipe.id))
            for recipe in crafting.furnace_recipes:
                self._emit(run, "furnace_recipes", str(recipe.id), recipe)
                self._advance("write.recipes", str(recipe.id))
            stats["files"] = total

    def _write_localization(self, run: _Run) -> None:
        tables = run.lang.serialize()
        with task("write.lang", "Localization", total=len(tables)) as stats:
            for language in Language:
                table = tables.get(language)
                if table is None:
                    continue
                with _entity_context("languages", language.value):
                    for section in LANG_SECTIONS:
                        run.emitter.emit(
                            plan_lang_path(self.mod.id, language, section),
                            table[section],
                        )
                run.counts["languages"] += 1
                self._advance("write.lang", language.value)
            stats["files"] = run.counts["languages"] * len(LANG_SECTIONS)
