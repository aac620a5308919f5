# app/tabs.py
from __future__ import annotations
from typing import Dict, Tuple


# -------- Quick Check tab set --------
QUICK_CHECK_TABS: Tuple[str, ...] = ("info", "pulling", "underhood", "tires")

DISPLAY_NAMES: Dict[str, str] = {
    "info": "Info",
    "pulling": "Pulling Into Bay",
    "underhood": "Underhood",
    "tires": "Tires & Brakes",
}


def display_name(tab_id: str) -> str:
    if tab_id in DISPLAY_NAMES:
        return DISPLAY_NAMES[tab_id]
    return tab_id[:1].upper() + tab_id[1:]
