"""Upgrade identifiers and display metadata."""

from dataclasses import dataclass
from enum import Enum


class UpgradeId(str, Enum):
    """Known upgrades."""

    WILDFIRE = "wildfire"
    FACE_CARDS = "face_cards"
    COMBO_MASTER = "combo_master"
    RECYCLING_PLANT = "recycling_plant"
    GEMINI = "gemini"
    EVO_SCALE = "evo_scale"
    EVO_BASE = "evo_base"
    RECYCLED_WOOD = "recycled_wood"


@dataclass(frozen=True)
class Upgrade:
    """Display metadata for one upgrade."""

    id: UpgradeId
    display_name: str
    icon: str
    description: str
    tooltip: str
    offerable: bool = True
