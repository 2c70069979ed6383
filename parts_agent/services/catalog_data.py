"""Static catalog records backing :class:`~parts_agent.services.catalog.StaticCatalog`."""

from __future__ import annotations

from typing import Any

PARTSELECT_HOME = "https://www.partselect.com/"

PART_RECORDS: tuple[dict[str, Any], ...] = (
    {
        "part_number": "PS11752778",
        "name": "Refrigerator Door Shelf Bin",
        "price": "$45.07",
        "category": "refrigerator",
        "description": "Clear door shelf bin for refrigerator storage compartment.",
        "compatibility": ("WRF535SWHZ00", "WRS325SDHZ00", "WRF767SDHZ00", "ED5FHAXVB02"),
        "buy_link": "https://www.partselect.com/PS11752778-Whirlpool-WPW10321304-Refrigerator-Door-Bin.htm",
    },
    {
        "part_number": "PS11756692",
        "name": "Dishwasher Pump and Motor Assembly",
        "price": "$164.95",
        "category": "dishwasher",
        "description": "Whirlpool dishwasher drain pump and motor assembly. Fits models WDT780SAEM1 and similar.",
        "compatibility": ("WDT780SAEM1", "WDT730PAHZ0", "KDTM704KPS0", "WDF520PADM7"),
        "buy_link": "https://www.partselect.com/PS11756692-Whirlpool-W10348269-Dishwasher-Drain-Pump.htm",
    },
    {
        "part_number": "PS12584610",
        "name": "Ice Maker Assembly",
        "price": "$100.79",
        "category": "refrigerator",
        "description": "Complete ice maker assembly kit for refrigerator models WRS325SDHZ.",
        "compatibility": ("WRS325SDHZ01", "WRS325SDHZ05", "WRS325SDHZ08", "WRF535SWHZ04"),
        "buy_link": "https://www.partselect.com/PS12584610-Ice-Maker-Assembly.htm",
    },
    {
        "part_number": "PS733947",
        "name": "Refrigerator Ice Maker Motor Kit",
        "price": "$78.50",
        "category": "refrigerator",
        "description": "Replacement drive motor kit for refrigerator ice makers.",
        "compatibility": ("ED5FHAXVB02", "KSCS25FTSS02", "WRF535SWHZ00", "GI15NDXZS4"),
        "buy_link": PARTSELECT_HOME,
    },
    {
        "part_number": "PS260801",
        "name": "Dishwasher Motor and Pump Kit",
        "price": "$198.75",
        "category": "dishwasher",
        "description": "Circulation motor and pump kit for GE and KitchenAid dishwashers.",
        "compatibility": ("GDT695SSJSS", "HDA3600G06WW", "KDTE334GPS0", "KDPM354GPS0"),
        "buy_link": PARTSELECT_HOME,
    },
    {
        "part_number": "PS2179605",
        "name": "Refrigerator Water Filter EDR1RXD1",
        "price": "$49.99",
        "category": "refrigerator",
        "description": "Replacement water filter. Swap every six months or when water flow slows.",
        "compatibility": ("WRF535SWHZ00", "WRS325SDHZ00", "GI15NDXZS4", "WRF767SDHZ00"),
        "buy_link": PARTSELECT_HOME,
    },
    {
        "part_number": "PS356593",
        "name": "Dishwasher Lower Door Seal Kit",
        "price": "$23.45",
        "category": "dishwasher",
        "description": "Lower door seal kit that stops leaks along the bottom of the door.",
        "compatibility": ("KDTM354DSS0", "KDTE334GPS0", "WDF520PADM7", "KDFM404KPS0"),
        "buy_link": PARTSELECT_HOME,
    },
    {
        "part_number": "PS2355119",
        "name": "Refrigerator Evaporator Fan Motor",
        "price": "$78.50",
        "category": "refrigerator",
        "description": "Evaporator fan motor that circulates cold air through the fresh food section.",
        "compatibility": ("WRS588FIHZ00", "WRF535SWHZ00", "GI15NDXZS4", "WRS325SDHZ00"),
        "buy_link": PARTSELECT_HOME,
    },
    {
        "part_number": "PS9495545",
        "name": "Dishwasher Bottom Door Gasket",
        "price": "$19.75",
        "category": "dishwasher",
        "description": "Bottom door gasket for Frigidaire dishwashers.",
        "compatibility": ("FFBD2412SS0A", "FFID2426TS4A", "FDBB2112TX1A", "FFBD2411NW3A"),
        "buy_link": PARTSELECT_HOME,
    },
    {
        "part_number": "PS2071928",
        "name": "Refrigerator Defrost Heater",
        "price": "$42.99",
        "category": "refrigerator",
        "description": "Defrost heater that clears frost from the evaporator coils.",
        "compatibility": ("WRF767SDHZ00", "WRS588FIHZ00", "WRS325SDHZ00", "GI15NDXZS4"),
        "buy_link": PARTSELECT_HOME,
    },
    {
        "part_number": "PS11746240",
        "name": "Dishwasher Drain Hose",
        "price": "$31.75",
        "category": "dishwasher",
        "description": "Drain hose assembly running from the pump to the sink or disposal.",
        "compatibility": ("WDT780SAEM1", "KDTE334GPS0", "KDPM354GPS0", "WDT750SAHZ0"),
        "buy_link": PARTSELECT_HOME,
    },
    {
        "part_number": "PS2163382",
        "name": "Refrigerator Door Gasket",
        "price": "$95.80",
        "category": "refrigerator",
        "description": "Magnetic door gasket that seals the fresh food door.",
        "compatibility": ("WRF535SWHZ00", "WRF767SDHZ00", "WRS588FIHZ00", "WRS325SDHZ00"),
        "buy_link": PARTSELECT_HOME,
    },
    {
        "part_number": "PS11753379",
        "name": "Dishwasher Drain Pump 120V 60Hz",
        "price": "$59.95",
        "category": "dishwasher",
        "description": "Dishwasher drain pump replacement for water removal system.",
        "compatibility": ("WDT780SAEM1", "KDTE334GPS0", "WDF520PADM7", "KDPM354GPS0"),
        "image_url": (
            "https://images.thdstatic.com/productImages/726726fb-7066-4832-8043-1ab0c0c85c9a/"
            "svn/whirlpool-dishwasher-parts-wpw10348269-64_600.jpg"
        ),
        "buy_link": "https://www.partselect.com/PS11753379-Dishwasher-Drain-Pump.htm",
    },
)

# Frequently mistyped part numbers and the part they refer to.
PART_ALIASES: dict[str, str] = {
    "PS12752778": "PS11752778",
}

# Search phrase -> part numbers, most specific phrases first.
SEARCH_TERMS: dict[str, tuple[str, ...]] = {
    "ice maker motor": ("PS733947",),
    "ice maker assembly": ("PS12584610",),
    "ice not working": ("PS12584610", "PS733947"),
    "whirlpool ice maker": ("PS12584610", "PS733947"),
    "ice maker": ("PS12584610", "PS733947"),
    "dishwasher pump": ("PS11756692", "PS260801", "PS11753379"),
    "circulation pump": ("PS11756692",),
    "drain pump": ("PS11753379",),
    "wash pump": ("PS11756692",),
    "pump motor": ("PS11756692",),
    "wdt780saem1": ("PS11756692", "PS11746240"),
    "door seal": ("PS9495545", "PS356593"),
    "door gasket": ("PS9495545", "PS356593"),
    "dishwasher leak": ("PS9495545", "PS356593"),
    "water filter": ("PS2179605",),
    "water taste": ("PS2179605",),
    "filter replacement": ("PS2179605",),
    "fan motor": ("PS2355119",),
    "evaporator fan": ("PS2355119",),
    "defrost heater": ("PS2071928",),
    "not cooling": ("PS2071928", "PS2355119"),
    "drain hose": ("PS11746240",),
    "dishwasher not draining": ("PS11753379", "PS11746240"),
    "door bin": ("PS11752778",),
    "shelf bin": ("PS11752778",),
}

POPULAR_PARTS: dict[str, tuple[str, ...]] = {
    "dishwasher": ("PS11756692", "PS9495545", "PS11753379"),
    "refrigerator": ("PS11752778", "PS12584610", "PS733947", "PS2179605"),
}

# Known problems and the parts that usually fix them.
TROUBLESHOOTING_ADVICE: tuple[dict[str, Any], ...] = (
    {
        "problem": "ice maker not working",
        "category": "refrigerator",
        "solutions": (
            "Check if the ice maker is turned on and the water supply is connected",
            "Inspect the water filter - replace if clogged or overdue",
            "Test the ice maker assembly for proper operation",
            "Check water inlet valve for proper water flow",
        ),
        "common_parts": ("PS12584610", "PS733947", "PS2179605"),
        "warnings": ("Always disconnect power before servicing", "Check warranty status before repairs"),
    },
    {
        "problem": "dishwasher not draining",
        "category": "dishwasher",
        "solutions": (
            "Clear any food debris from the drain filter at the bottom of the tub",
            "Check the garbage disposal (if connected) for clogs",
            "Inspect the drain hose for kinks or blockages",
            "Test the wash pump motor for proper operation",
        ),
        "common_parts": ("PS11756692", "PS11746240", "PS11753379"),
        "warnings": (
            "Turn off power and water supply before servicing",
            "Wear gloves when handling drain components",
        ),
    },
    {
        "problem": "refrigerator not cooling",
        "category": "refrigerator",
        "solutions": (
            "Check temperature settings and ensure proper airflow around vents",
            "Clean condenser coils on the back or bottom of the refrigerator",
            "Test the evaporator fan motor for proper operation",
            "Check the defrost heater and defrost thermostat",
        ),
        "common_parts": ("PS2355119", "PS2071928"),
        "warnings": ("Allow 24 hours after temperature adjustments", "Unplug refrigerator before electrical work"),
    },
    {
        "problem": "dishwasher not cleaning dishes",
        "category": "dishwasher",
        "solutions": (
            "Check spray arms for clogs and clean if necessary",
            "Verify proper loading technique and use appropriate detergent",
            "Inspect door seals for proper sealing during wash cycle",
            "Test wash pump motor pressure and operation",
        ),
        "common_parts": ("PS11756692", "PS356593"),
        "warnings": ("Use only dishwasher-safe detergents", "Check water temperature (120°F recommended)"),
    },
)
