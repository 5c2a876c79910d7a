"""Block model geometry: models own cuboids, cuboids own six faces."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .identifier import Identifier
from .texture import Texture

__all__ = [
    "FACE_KEYS",
    "BlockModelFace",
    "BlockModelCuboid",
    "BlockModel",
    "model_ref",
]

# Cuboid face attribute -> serialized key.
FACE_KEYS: Dict[str, str] = {
    "west": "localNegX",
    "east": "localPosX",
    "down": "localNegY",
    "up": "localPosY",
    "north": "localNegZ",
    "south": "localPosZ",
}

FULL_BLOCK: Tuple[float, ...] = (0, 0, 0, 16, 16, 16)


class BlockModelFace:
    def __init__(self) -> None:
        self.texture: Optional[Texture] = None
        self.uv: Tuple[float, float, float, float] = (0, 0, 16, 16)
        self.cull: bool = True
        self.receive_ao: Optional[bool] = None
        self.uv_rotation: Optional[int] = None

    def serialize(self, texture_slot: str) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "uv": list(self.uv),
            "cullFace": self.cull,
            "texture": texture_slot,
        }
        if self.receive_ao is not None:
            out["ambientocclusion"] = self.receive_ao
        if self.uv_rotation is not None:
            out["uvRotation"] = self.uv_rotation
        return out

    def clone(self) -> "BlockModelFace":
        face = BlockModelFace()
        face.texture = self.texture
        face.uv = self.uv
        face.cull = self.cull
        face.receive_ao = self.receive_ao
        face.uv_rotation = self.uv_rotation
        return face


class BlockModelCuboid:
    def __init__(self, bounds: Sequence[float] = FULL_BLOCK) -> None:
        self.bounds: Tuple[float, ...] = tuple(bounds)
        if len(self.bounds) != 6:
            raise ValueError("Cuboid bounds need 6 values (min xyz, max xyz)")
        self.faces: Dict[str, BlockModelFace] = {
            name: BlockModelFace() for name in FACE_KEYS
        }

    def set_size(self, *bounds: float) -> None:
        if len(bounds) != 6:
            raise ValueError("Cuboid bounds need 6 values (min xyz, max xyz)")
        self.bounds = tuple(bounds)

    def get_all_faces(self) -> List[BlockModelFace]:
        return list(self.faces.values())

    def set_all_textures(self, texture: Optional[Texture]) -> None:
        for face in self.faces.values():
            face.texture = texture

    def get_used_textures(self) -> List[Texture]:
        return list(
            dict.fromkeys(
                f.texture for f in self.faces.values() if f.texture is not None
            )
        )

    def serialize(self, texture_slots: Dict[Texture, str]) -> Dict[str, Any]:
        faces = {
            FACE_KEYS[name]: face.serialize(texture_slots[face.texture])
            for name, face in self.faces.items()
            if face.texture is not None
        }
        return {"localBounds": list(self.bounds), "faces": faces}

    def clone(self) -> "BlockModelCuboid":
        cuboid = BlockModelCuboid(self.bounds)
        cuboid.faces = {n: f.clone() for n, f in self.faces.items()}
        return cuboid


ModelParent = Union["BlockModel", Identifier, str, None]


def model_ref(model: Any) -> Optional[str]:
    """Serialized reference to a block model (live, Identifier or string)."""
    if model is None:
        return None
    if isinstance(model, BlockModel):
        return str(model.get_block_model_id())
    return str(model)


class BlockModel:
    def __init__(self, mod: Any, id: Identifier) -> None:
        self.mod = mod
        self.id = id
        self.parent: ModelParent = None
        self.culls_self = True
        self.transparent = False
        self._cuboids: List[BlockModelCuboid] = []
        self._texture_overrides: Dict[str, Texture] = {}

    def set_parent(self, parent: ModelParent) -> None:
        self.parent = parent

    def create_cuboid(
        self, bounds: Sequence[float] = FULL_BLOCK
    ) -> BlockModelCuboid:
        cuboid = BlockModelCuboid(bounds)
        self._cuboids.append(cuboid)
        return cuboid

    def add_cuboid(self, *cuboids: BlockModelCuboid) -> None:
        self._cuboids.extend(cuboids)

    def remove_cuboid(self, *cuboids: BlockModelCuboid) -> None:
        for cuboid in cuboids:
            self._cuboids.remove(cuboid)

    def get_cuboids(self) -> List[BlockModelCuboid]:
        return list(self._cuboids)

    def set_texture_override(self, slot: str, texture: Texture) -> None:
        """Bind ``slot`` to ``texture``, replacing any inherited binding."""
        self._texture_overrides[slot] = texture

    def get_texture_overrides(self) -> Dict[str, Texture]:
        return dict(self._texture_overrides)

    def set_all_textures(self, texture: Optional[Texture]) -> None:
        for cuboid in self._cuboids:
            cuboid.set_all_textures(texture)

    def get_used_textures(self) -> List[Texture]:
        # Own faces only; the parent is written with its own textures.
        used: Dict[Texture, None] = {}
        for cuboid in self._cuboids:
            used.update(dict.fromkeys(cuboid.get_used_textures()))
        return list(used)

    def clone(self, new_id: str) -> "BlockModel":
        model = BlockModel(self.mod, self.id.derive(new_id))
        model.parent = self.parent
        model.culls_self = self.culls_self
        model.transparent = self.transparent
        model._cuboids = [c.clone() for c in self._cuboids]
        model._texture_overrides = dict(self._texture_overrides)
        return model

    def add_model(self, *models: "BlockModel") -> None:
        for other in models:
            self._cuboids.extend(c.clone() for c in other._cuboids)

    def texture_slots(self) -> Dict[Texture, str]:
        """Slot name per texture: override slots first, then ``texture.id``."""
        slots: Dict[Texture, str] = {}
        for slot, texture in self._texture_overrides.items():
            slots.setdefault(texture, slot)
        taken = set(self._texture_overrides)
        for texture in self.get_used_textures():
            if texture in slots:
                continue
            name, n = texture.id, 1
            while name in taken:
                name = f"{texture.id}_{n}"
                n += 1
            slots[texture] = name
            taken.add(name)
        return slots

    def serialize(self) -> Dict[str, Any]:
        slots = self.texture_slots()
        textures = {
            slot: {"fileName": str(tex.get_as_block_texture_id(self.mod))}
            for slot, tex in self._texture_overrides.items()
        }
        for tex, slot in slots.items():
            textures.setdefault(
                slot, {"fileName": str(tex.get_as_block_texture_id(self.mod))}
            )
        out: Dict[str, Any] = {
            "textures": textures,
            "cuboids": [c.serialize(slots) for c in self._cuboids],
            "cullsSelf": self.culls_self,
        }
        if self.transparent:
            out["isTransparent"] = True
        if self.parent is not None:
            out["parent"] = model_ref(self.parent)
        return out

    def get_block_model_path(self) -> str:
        return f"models/blocks/{self.id.get_item()}.json"

    def get_block_model_id(self) -> Identifier:
        return self.id.derive(self.get_block_model_path())

    def __repr__(self) -> str:
        return f"BlockModel({str(self.id)!r})"
