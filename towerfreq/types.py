from typing import Dict, FrozenSet, Tuple, TypeAlias

CellId: TypeAlias = str
VertexIndex: TypeAlias = int
Channel: TypeAlias = int
EdgeKey: TypeAlias = Tuple[VertexIndex, VertexIndex]
Adjacency: TypeAlias = Tuple[FrozenSet[VertexIndex], ...]
DistanceMap: TypeAlias = Dict[EdgeKey, float]
