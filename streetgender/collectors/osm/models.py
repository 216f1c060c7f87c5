"""
OSM data models

Data classes for representing OSM nodes, ways and relations
"""

from typing import List, Dict, Optional
from dataclasses import dataclass, field

NODE = "node"
WAY = "way"
RELATION = "relation"

ELEMENT_KINDS = (NODE, WAY, RELATION)


@dataclass(frozen=True)
class OSMMember:
    """A member reference of a relation"""
    kind: str
    ref: int
    role: str = ""


@dataclass(frozen=True)
class OSMElement:
    """Fields shared by every OSM element"""
    id: int
    tags: Dict[str, str] = field(default_factory=dict, compare=False)

    kind = ""

    def tag(self, key: str) -> Optional[str]:
        """Value of an optional tag"""
        return self.tags.get(key)

    @property
    def label(self) -> str:
        return f"{self.kind}({self.id})"


@dataclass(frozen=True)
class OSMNode(OSMElement):
    """Represents an OSM node (point)"""
    lat: float = 0.0
    lon: float = 0.0

    kind = NODE


@dataclass(frozen=True)
class OSMWay(OSMElement):
    """Represents an OSM way, an ordered path of node ids"""
    nodes: List[int] = field(default_factory=list)

    kind = WAY


@dataclass(frozen=True)
class OSMRelation(OSMElement):
    """Represents an OSM relation, an ordered list of role-tagged members"""
    members: List[OSMMember] = field(default_factory=list)

    kind = RELATION

    def members_with_roles(self, roles) -> List[OSMMember]:
        return [m for m in self.members if m.role in roles]
