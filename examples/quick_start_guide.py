#!/usr/bin/env python3
"""
Quick Start Guide for loose-xml.

Walks through parsing an entity definition, recovering from syntax errors,
editing an owned copy and writing it back out.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from loose_xml import (
    Element,
    LooseXMLConfig,
    LooseXMLParser,
    ParseError,
    format_element,
    parse,
    parse_lenient,
)

ENTITY = """<?xml version="1.0" encoding="UTF-8"?>
<!-- The player character -->
<Entity name="player" tags="hittable,teleportable">
    <DamageModelComponent hp="4" air_needed="1" />
    <SpriteComponent image_file="data/enemies_gfx/player.xml" />
    <Inventory>
        <Item name="wand" />
        <Item name="potion" />
    </Inventory>
    <Description>Brave "Deals no damage"</Description>
</Entity>
"""

BROKEN = """<Entity name="goblin">
    <DamageModelComponent hp />
    <Inventory>
        <Item name="dagger">
    </Inventory>
</Entity>
"""


def quick_start_example():
    """Parse, inspect, edit and write back an entity definition."""

    print("QUICK START - loose-xml")
    print("=" * 45)

    # Step 1: Parse a document
    print("\nStep 1: Parsing")
    print("-" * 30)

    root = parse(ENTITY)
    print(f"Root element: <{root.tag}> named {root.attr('name')!r}")
    print(f"Children: {[child.tag for child in root.children]}")
    print(f"Description text: {root.require_child('Description').text!r}")

    # Step 2: Navigate
    print("\nStep 2: Navigation")
    print("-" * 30)

    inventory = root.require_child("Inventory")
    for item in inventory.children_named("Item"):
        print(f"  item: {item.attr('name')}")
    print(f"hp = {root.require_child('DamageModelComponent').attr('hp')}")

    # Step 3: Lenient parsing
    print("\nStep 3: Recovering from errors")
    print("-" * 30)

    try:
        parse(BROKEN)
    except ParseError as e:
        print(f"Strict parse failed: {e}")

    broken_root, errors = parse_lenient(BROKEN)
    print(f"Lenient parse built <{broken_root.tag}> with {len(errors)} errors:")
    for error in errors:
        print(f"  {error.kind} at {error.position}: {error.message}")

    # Step 4: Edit an owned copy
    print("\nStep 4: Editing")
    print("-" * 30)

    entity = root.into_owned()
    entity.set_attr("name", "player_clone")
    entity.require_child("Inventory").append_child(
        Element("Item").set_attr("name", "bomb")
    )
    entity.append_child(Element("LuaComponent").set_attr("script", "data/scripts/clone.lua"))
    print(format_element(entity))

    # Step 5: Configured parser
    print("\nStep 5: Configured parser")
    print("-" * 30)

    parser = LooseXMLParser(LooseXMLConfig.compact(), correlation_id="quick-start")
    compact_root = parser.parse(ENTITY)
    metrics = parser.last_metrics
    print(format_element(compact_root, parser.config.format))
    print(
        f"{metrics.elements_built} elements, {metrics.tokens_generated} tokens, "
        f"depth {metrics.max_depth}, {metrics.processing_time_ms:.3f} ms"
    )


if __name__ == "__main__":
    quick_start_example()
