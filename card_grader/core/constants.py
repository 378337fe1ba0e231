from typing import Final, Tuple

# Normalized grid (h, w, channels)
IMAGE_SIZE: Final[int] = 224
IMAGE_SHAPE: Final[Tuple[int, int, int]] = (IMAGE_SIZE, IMAGE_SIZE, 3)
PIXEL_SCALE: Final[float] = 255.0

# Score range
SCORE_MIN: Final[float] = 0.0
SCORE_MAX: Final[float] = 10.0

# Centering: one point lost per 22.4 px of centroid drift
IDEAL_CENTER: Final[Tuple[float, float]] = (112.0, 112.0)
CENTER_TOLERANCE_PX: Final[float] = 22.4

# Gradient / Laplacian scaling
GRADIENT_SCALE: Final[float] = 20.0
LAPLACIAN_SCALE: Final[float] = 100.0

# Corner regions (row, col) offsets of CORNER_SIZE x CORNER_SIZE windows
CORNER_SIZE: Final[int] = 32
CORNER_OFFSETS: Final[Tuple[Tuple[int, int], ...]] = (
    (0, 0),
    (0, 192),
    (192, 0),
    (192, 192),
)

SOBEL_H = ((-1, 0, 1), (-2, 0, 2), (-1, 0, 1))
SOBEL_V = ((-1, -2, -1), (0, 0, 0), (1, 2, 1))
LAPLACIAN = ((0, 1, 0), (1, -4, 1), (0, 1, 0))

# Card detail sentinel
UNKNOWN: Final[str] = "Unknown"

# Category keywords, sports checked first
SPORTS_KEYWORDS: Final[Tuple[str, ...]] = ("rookie", "season", "stats", "team", "record")
TRADING_KEYWORDS: Final[Tuple[str, ...]] = (
    "pokemon", "pokémon", "magic", "yugioh", "yu-gi-oh", "mtg",
)

TYPE_KEYWORDS: Final[Tuple[str, ...]] = (
    # Pokemon
    "fire", "water", "grass", "lightning", "psychic", "fighting",
    "darkness", "metal", "fairy", "dragon", "colorless", "trainer", "energy",
    # Magic / Yu-Gi-Oh!
    "creature", "instant", "sorcery", "enchantment", "artifact",
    "planeswalker", "land", "spell", "trap",
    # Sports
    "pitcher", "catcher", "quarterback", "forward", "guard", "center",
    "goalie", "defenseman",
)

# Longest phrases first
RARITY_KEYWORDS: Final[Tuple[str, ...]] = (
    "secret rare", "ultra rare", "holo rare", "rare holo",
    "mythic rare", "illustration rare", "uncommon", "common",
    "mythic", "promo", "rare",
)

# Pipeline stages in execution order
STAGE_TEXT: Final[str] = "Text Extraction"
STAGE_IMAGE: Final[str] = "Image Processing"
STAGE_CENTERING: Final[str] = "Centering Analysis"
STAGE_CORNERS: Final[str] = "Corner Analysis"
STAGE_EDGES: Final[str] = "Edge Detection"
STAGE_SURFACE: Final[str] = "Surface Analysis"
STAGE_MARKET: Final[str] = "Market Research"

PIPELINE_STAGES: Final[Tuple[str, ...]] = (
    STAGE_TEXT,
    STAGE_IMAGE,
    STAGE_CENTERING,
    STAGE_CORNERS,
    STAGE_EDGES,
    STAGE_SURFACE,
)

STAGE_START_DETAILS = {
    STAGE_TEXT: "Reading card information...",
    STAGE_IMAGE: "Preparing images for analysis...",
    STAGE_CENTERING: "Calculating card centering...",
    STAGE_CORNERS: "Evaluating corner conditions...",
    STAGE_EDGES: "Examining card edges...",
    STAGE_SURFACE: "Analyzing surface condition...",
    STAGE_MARKET: "Gathering sales data...",
}
