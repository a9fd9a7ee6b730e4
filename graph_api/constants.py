"""
    Shared drawing and hit-testing constants.

    Renderers and the interaction controller must agree on these values.
    The hit radius is twice the drawn radius.
"""

# Default fill for newly created nodes
DEFAULT_NODE_COLOR = "#0000FF"

# Radius of the filled disc a renderer draws for every node
NODE_RADIUS = 10

# Outline width around the selected node
SELECTED_OUTLINE_WIDTH = 3

# Pointer-to-center distance (exclusive) that counts as a hit
HIT_RADIUS = 20

# Id assigned to the first node / graph of an empty sequence
FIRST_ID = 1
