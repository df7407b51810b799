# -*- coding: utf-8 -*-
"""Single source of truth for persisted keys.

These are *storage keys* shared by the settings file and snapshot JSON.
They match the column names of the existing sheets; keep them stable.
"""

from __future__ import annotations

from typing import Dict


class CapacityKeys:
    UPS_A = "UPS_A_kW"
    UPS_B = "UPS_B_kW"
    UPS_C = "UPS_C_kW"
    ROOM_ITN1 = "ROOM_CAPACITY_ITN1_kW"
    ROOM_ITN2 = "ROOM_CAPACITY_ITN2_kW"
    ROOM_ITN3 = "ROOM_CAPACITY_ITN3_kW"
    ROW_AC = "ROW_AC_CAPACITY_kW"
    ROW_DC = "ROW_DC_CAPACITY_kW"


# storage key -> Capacities field
CAPACITY_FIELDS: Dict[str, str] = {
    CapacityKeys.UPS_A: "ups_a",
    CapacityKeys.UPS_B: "ups_b",
    CapacityKeys.UPS_C: "ups_c",
    CapacityKeys.ROOM_ITN1: "room_itn1",
    CapacityKeys.ROOM_ITN2: "room_itn2",
    CapacityKeys.ROOM_ITN3: "room_itn3",
    CapacityKeys.ROW_AC: "row_ac",
    CapacityKeys.ROW_DC: "row_dc",
}

CAPACITY_LABELS: Dict[str, str] = {
    CapacityKeys.UPS_A: "UPS Chain A",
    CapacityKeys.UPS_B: "UPS Chain B",
    CapacityKeys.UPS_C: "UPS Chain C",
    CapacityKeys.ROW_AC: "Row AC Capacity",
    CapacityKeys.ROW_DC: "Row DC Capacity",
    CapacityKeys.ROOM_ITN1: "Room ITN1 Capacity",
    CapacityKeys.ROOM_ITN2: "Room ITN2 Capacity",
    CapacityKeys.ROOM_ITN3: "Room ITN3 Capacity",
}


class SettingsKeys:
    CAPACITIES = "capacities"
    EFFICIENCY_PCT = "rectifier_efficiency_pct"
    OTHER_CONSUMERS = "other_consumers"


class SnapshotKeys:
    RACKS = "racks"
    OTHER_CONSUMERS = "otherConsumers"
    CAPACITIES = "capacities"
    FAILED_CHAINS = "failedChains"
    EFFICIENCY = "efficiency"
