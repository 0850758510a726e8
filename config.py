"""I centralise the main numeric knobs for the village simulation so I can tweak balance easily."""

# Village starting resources
STARTING_FOOD: int = 20
STARTING_WOOD: int = 15
STARTING_STONE: int = 15

# Founding population: the first STARTER_SITES-many founders start employed, one per site.
FOUNDER_COUNT: int = 6
FOUNDER_NAME: str = "Founder"

# Starter sites as (category label, site name), in roster-assignment order.
STARTER_SITES: tuple[tuple[str, str], ...] = (
    ("Farm", "Farm 1"),
    ("Lumber Mill", "Mill 1"),
    ("Mine", "Mine 1"),
)

# --- Sites & yields ---
DEFAULT_SITE_CAPACITY: int = 5
OUTPUT_PER_WORKER: int = 3

# Build catalogue: category label -> (wood cost, stone cost)
BUILD_COSTS: dict[str, tuple[int, int]] = {
    "Farm": (4, 1),
    "Mine": (6, 3),
    "Lumber Mill": (3, 2),
}

# --- Upkeep ---
FOOD_PER_MEAL: int = 2

# --- Behaviour policies ---
# A full site still announces "a worker was added" even though nobody joined.
ANNOUNCE_REJECTED_ASSIGNMENTS: bool = True
# Idle workers are re-queued on every turn without de-duplication.
DEDUPE_IDLE_QUEUE: bool = False

# --- Runner defaults ---
DEFAULT_TURNS: int = 10
DEFAULT_SAVE_PATH: str = "data/village.json"

# --- Rounding / display ---
RESOURCE_DISPLAY_WIDTH: int = 4
EVENT_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"
