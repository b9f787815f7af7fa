"""
Example layout configuration file for the ChestGUI CLI.

Usage:
    chestgui cli export full examples/layout_config.py -o build/
"""

layout_config = {
    # placements are exported in this order
    'placements': [
        {
            'name': 'ender-chest',
            'offset': (0, -2),
            'size': (176, 223),
            'preset': 'row6',
        },
        {
            'name': 'barrel',
            'offset': (-45, -44),
            'size': (176, 133),
            'preset': '1 Row',
        },
        {
            # no offset: the size class default is used
            'name': 'shulker',
            'size': (176, 169),
            'preset': 3,
        },
    ],
}
