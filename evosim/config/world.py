"""World geometry configuration constants."""

# Size of the rectangular world in simulation units (one unit = one pixel
# when rendered 1:1)
WORLD_WIDTH = 1024
WORLD_HEIGHT = 1024
