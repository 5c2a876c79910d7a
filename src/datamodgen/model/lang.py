"""Localization keys and the per-language tables written under ``lang/``."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

__all__ = ["Language", "LangKey", "LangMap"]


class Language(Enum):
    EN_US = "en_us"
    DE_DE = "de_de"
    ES_ES = "es_es"
    FR_FR = "fr_fr"
    JA_JP = "ja_jp"
    KO_KR = "ko_kr"
    PT_BR = "pt_br"
    RU_RU = "ru_ru"
    ZH_CN = "zh_cn"


class LangKey:
    def __init__(self, id: str) -> None:
        self.id = id
        self.translations: Dict[Language, str] = {}

    def set(self, language: Language, text: str) -> "LangKey":
        self.translations[language] = text
        return self

    def get(self, language: Language) -> Optional[str]:
        return self.translations.get(language)

    def __repr__(self) -> str:
        return f"LangKey({self.id!r})"


class LangMap:
    def __init__(self, namespace: str) -> None:
        self.namespace = namespace
        self._block_keys: Dict[str, LangKey] = {}
        self._item_keys: Dict[str, LangKey] = {}

    def create_block_key(self, name: str) -> LangKey:
        return self.add_block_key(LangKey(f"{self.namespace}:{name}"))

    def create_item_key(self, name: str) -> LangKey:
        return self.add_item_key(LangKey(f"{self.namespace}:{name}"))

    def add_block_key(self, key: LangKey) -> LangKey:
        return self._block_keys.setdefault(key.id, key)

    def add_item_key(self, key: LangKey) -> LangKey:
        return self._item_keys.setdefault(key.id, key)

    def copy(self) -> "LangMap":
        dup = LangMap(self.namespace)
        dup._block_keys = dict(self._block_keys)
        dup._item_keys = dict(self._item_keys)
        return dup

    def serialize(self) -> Dict[Language, Dict[str, Dict[str, str]]]:
        """Per-language ``{"items": {...}, "blocks": {...}}`` tables.

        Languages without a single translated key are left out.
        """
        out: Dict[Language, Dict[str, Dict[str, str]]] = {}
        for language in Language:
            items = _table(self._item_keys, language)
            blocks = _table(self._block_keys, language)
            if items or blocks:
                out[language] = {"items": items, "blocks": blocks}
        return out


def _table(keys: Dict[str, LangKey], language: Language) -> Dict[str, str]:
    table: Dict[str, str] = {}
    for key_id, key in keys.items():
        text = key.get(language)
        if text is not None:
            table[key_id] = text
    return table
