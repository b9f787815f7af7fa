"""
Build a small chest.json with the ChestGUI API.
"""

from chestgui.api import PlacementStore, export_chest_json, generate_all_configs

store = PlacementStore()

store.set_current_field("name", "ender-chest")
store.set_current_field("height", 223)
store.nudge(0, -2)
store.commit()

store.select_preset("row1")
store.set_current_field("name", "barrel")
store.set_current_field("height", 133)

print(generate_all_configs(store.placements()))
print(f"Wrote {export_chest_json(store.placements(), 'build')}")
