"""Common literal values used across notes_site.

These constants keep filenames and theme lookups centralized so templates,
generators, and tests can import the same values without drifting. Intended
for internal use within the notes_site package.

Examples
--------
>>> from notes_site import _constants
>>> _constants.STYLESHEET_PATH
'assets/site.css'
>>> _constants.PALETTE_COLOURS["blue"]
'#2196f3'
"""

DEFAULT_CONFIG_FILE = "mkdocs.yml"
STYLESHEET_PATH = "assets/site.css"

# Material Design palette names accepted by ``theme.palette``; any other value
# is emitted verbatim as a CSS colour.
PALETTE_COLOURS: dict[str, str] = {
    "red": "#f44336",
    "pink": "#e91e63",
    "purple": "#9c27b0",
    "deep purple": "#673ab7",
    "indigo": "#3f51b5",
    "blue": "#2196f3",
    "light blue": "#03a9f4",
    "cyan": "#00bcd4",
    "teal": "#009688",
    "green": "#4caf50",
    "light green": "#8bc34a",
    "lime": "#cddc39",
    "yellow": "#ffeb3b",
    "amber": "#ffc107",
    "orange": "#ff9800",
    "deep orange": "#ff5722",
    "brown": "#795548",
    "grey": "#9e9e9e",
    "blue grey": "#607d8b",
    "black": "#000000",
    "white": "#ffffff",
}
