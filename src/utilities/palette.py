"""
Colour palette for airlock lighting fixtures.
"""

class Color(tuple):
    """A simple RGB color class for better readability."""
    def __new__(cls, index, name, r, g, b):
        return super(Color, cls).__new__(cls, (r, g, b))

    def __init__(self, index, name, r, g, b):
        self.index = index
        self.name = name

class Palette:
    """
    Named fixture colours.
    Usage: Palette.RED, or Palette.get_color(11) when reading layouts by index.
    """

    OFF       = Color(0, "OFF", 0, 0, 0)
    WHITE     = Color(4, "WHITE", 255, 255, 255)   # Default fixture state
    WARM      = Color(5, "WARM", 255, 220, 180)    # Habitat lighting
    RED       = Color(11, "RED", 255, 0, 0)        # Isolation alert
    ORANGE    = Color(21, "ORANGE", 255, 120, 0)
    YELLOW    = Color(31, "YELLOW", 255, 255, 0)
    GREEN     = Color(41, "GREEN", 0, 200, 0)      # Pressurized / safe
    CYAN      = Color(51, "CYAN", 0, 200, 200)
    BLUE      = Color(61, "BLUE", 0, 0, 255)

    LIBRARY = {
        0: OFF, 4: WHITE, 5: WARM,
        11: RED, 21: ORANGE, 31: YELLOW,
        41: GREEN, 51: CYAN, 61: BLUE,
    }

    @staticmethod
    def get_color(index):
        """Get the color from the palette library by index."""
        return Palette.LIBRARY.get(index, Palette.OFF)

    @staticmethod
    def by_name(name, default=None):
        """Look a colour up by its name (case-insensitive)."""
        if name is None:
            return default
        wanted = str(name).upper()
        for color in Palette.LIBRARY.values():
            if color.name == wanted:
                return color
        return default
