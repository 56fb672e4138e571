"""Memory held in fields: bounded storage, gravitational recall, layered growth and keyword search."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field

from .gravitational import Vector3D

# Every stored item is stamped with the same simulation time.
_TIMESTAMP = 1000.0
_MIN_RETRIEVAL_STRENGTH = 0.1
_MIN_WEIGHT = 0.01
_BASE_LAYER_EXPONENT = 10
_SEPARATORS = re.compile(r"[ \n\t]+")


def _distance(first: Vector3D, second: Vector3D) -> float:
    return math.sqrt(
        (first.x - second.x) ** 2 + (first.y - second.y) ** 2 + (first.z - second.z) ** 2
    )


@dataclass
class StorageField:
    """One stored item with its placement and access record."""

    id: str
    data: bytes
    field_type: str
    coordinates: Vector3D
    access_count: int = 0
    last_access: float = _TIMESTAMP


class FieldBasedStorage:
    """Storage bounded by a capacity, charging each item its compressed size."""

    def __init__(self, capacity: int, compression: float) -> None:
        self.capacity = capacity
        self.compression = compression
        self.used_space = 0
        self.storage_fields: dict[str, StorageField] = {}

    def store(
        self, item_id: str, data: bytes, field_type: str, coordinates: Vector3D
    ) -> bool:
        """Store a copy of *data*; False when its compressed size does not fit."""
        size = int(len(data) * self.compression)
        if self.used_space + size > self.capacity:
            return False
        self.storage_fields[item_id] = StorageField(
            id=item_id,
            data=bytes(data),
            field_type=field_type,
            coordinates=coordinates,
        )
        self.used_space += size
        return True

    def retrieve(self, item_id: str) -> bytes:
        """The data stored under *item_id*, recording the access; KeyError if absent."""
        try:
            entry = self.storage_fields[item_id]
        except KeyError:
            raise KeyError(f"no stored field: {item_id}") from None
        entry.access_count += 1
        entry.last_access = _TIMESTAMP
        return entry.data


@dataclass
class MemoryNode:
    """A memory placed at a position, with a weight that decays over time."""

    id: str
    position: Vector3D
    data: bytes
    weight: float
    created: float


class GravitationalMemoryField:
    """Memories recalled by their gravitational pull on a query position."""

    def __init__(self, strength: float, decay: float, capacity: int) -> None:
        self.field_strength = strength
        self.decay_rate = decay
        self.capacity = capacity
        self.memory_nodes: dict[str, MemoryNode] = {}

    def _weight(self, data: bytes, position: Vector3D) -> float:
        return self.field_strength * (len(data) / 1024.0) / (1.0 + position.magnitude())

    def _evict_oldest(self) -> None:
        oldest = min(self.memory_nodes.values(), key=lambda n: n.created, default=None)
        if oldest is not None:
            del self.memory_nodes[oldest.id]

    def store(self, memory_id: str, data: bytes, position: Vector3D) -> None:
        """Place a memory, evicting the oldest one first when the field is full."""
        if len(self.memory_nodes) >= self.capacity:
            self._evict_oldest()
        self.memory_nodes[memory_id] = MemoryNode(
            id=memory_id,
            position=position,
            data=bytes(data),
            weight=self._weight(data, position),
            created=_TIMESTAMP,
        )

    def retrieve(self, query_position: Vector3D, radius: float) -> list[MemoryNode]:
        """Memories within *radius* whose pull on the query exceeds the recall threshold."""
        found: list[MemoryNode] = []
        for node in self.memory_nodes.values():
            distance = _distance(query_position, node.position)
            if distance > radius:
                continue
            strength = node.weight if distance == 0 else node.weight / (distance * distance)
            if strength > _MIN_RETRIEVAL_STRENGTH:
                found.append(node)
        return found

    def apply_decay(self, delta_time: float) -> None:
        """Decay every weight exponentially and forget memories that grow too faint."""
        factor = math.exp(-self.decay_rate * delta_time)
        faded = []
        for memory_id, node in self.memory_nodes.items():
            node.weight *= factor
            if node.weight < _MIN_WEIGHT:
                faded.append(memory_id)
        for memory_id in faded:
            del self.memory_nodes[memory_id]


@dataclass
class MemoryLayer:
    """One layer of layered memory with its capacity and contents."""

    level: int
    capacity: int
    used: int = 0
    data: dict[str, bytes] = field(default_factory=dict)


class InfiniteMemorySystem:
    """Memory that opens layers of doubling capacity as the earlier ones fill."""

    def __init__(self, max_layers: int, growth_rate: float) -> None:
        self.max_layers = max_layers
        self.growth_rate = growth_rate
        self.layers: dict[int, MemoryLayer] = {}
        self.compression: dict[int, float] = {}

    def store(self, item_id: str, data: bytes) -> int:
        """Store *data* in the first layer with room and return that layer's level.

        When no layer has room a new one is opened; once the layer limit is
        reached the data goes to layer 0 regardless of its capacity.
        """
        level = self._find_layer(len(data))
        if level is None:
            level = self._create_layer()
        layer = self.layers.get(level)
        if layer is None:
            raise RuntimeError("no memory layer available")
        layer.data[item_id] = bytes(data)
        layer.used += len(data)
        return level

    def _find_layer(self, size: int) -> int | None:
        for level in sorted(self.layers):
            layer = self.layers[level]
            if layer.used + size <= layer.capacity:
                return level
        return None

    def _create_layer(self) -> int:
        level = len(self.layers)
        if level >= self.max_layers:
            return 0
        self.layers[level] = MemoryLayer(level, 2 ** (level + _BASE_LAYER_EXPONENT))
        divisor = self.growth_rate**level
        self.compression[level] = math.inf if divisor == 0 else 1.0 / divisor
        return level


def _keywords(content: str) -> list[str]:
    return [word for word in _SEPARATORS.split(content) if word]


class MemoryRetrieval:
    """A keyword index over memories, ranking matches by their weights."""

    def __init__(self) -> None:
        self.keyword_index: dict[str, list[str]] = {}
        self.associations: dict[str, list[str]] = {}
        self.weights: dict[str, float] = {}

    def index(self, memory_id: str, content: str, weight: float) -> None:
        """Index *content* under *memory_id*; words are split on spaces, tabs and newlines."""
        for keyword in _keywords(content):
            self.keyword_index.setdefault(keyword, []).append(memory_id)
        self.weights[memory_id] = weight

    def search(self, query: str) -> list[str]:
        """Identifiers of memories sharing a word with *query*, highest score first."""
        scores: dict[str, float] = {}
        for keyword in _keywords(query):
            for memory_id in self.keyword_index.get(keyword, ()):
                scores[memory_id] = scores.get(memory_id, 0.0) + self.weights.get(
                    memory_id, 0.0
                )
        return sorted(scores, key=lambda memory_id: -scores[memory_id])


__all__ = [
    "FieldBasedStorage",
    "GravitationalMemoryField",
    "InfiniteMemorySystem",
    "MemoryLayer",
    "MemoryNode",
    "MemoryRetrieval",
    "StorageField",
]