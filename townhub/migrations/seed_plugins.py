# townhub/migrations/seed_plugins.py
"""Insert the default plugins that are missing (matched by name)."""
from townhub.migrations.runner import Migration, cli, run_migration
from townhub.models.plugin import Plugin
from townhub.services.economy import DOUBLES_DAY_ROUTE_PATH

NAME = "seed_plugins"

DEFAULT_PLUGINS = [
    {"name": "Bank", "route_path": "/bank", "icon": "🏦",
     "description": "Financial services and banking"},
    {"name": "Land & Property", "route_path": "/land", "icon": "🗺️",
     "description": "Land registry and property management"},
    {"name": "Jobs", "route_path": "/jobs", "icon": "💼",
     "description": "Employment board and job listings"},
    {"name": "Town News", "route_path": "/news", "icon": "📰",
     "description": "Local news and updates"},
    {"name": "Government", "route_path": "/government", "icon": "🏛️",
     "description": "Town government services"},
    {"name": "Town Rules", "route_path": "/town-rules", "icon": "📜",
     "description": "Town-specific rules and regulations"},
    {"name": "The Winkel", "route_path": "/winkel", "icon": "🛒",
     "description": "Weekly shop for consumables and privileges"},
    {"name": "Chores", "route_path": "/chores", "icon": "🧹",
     "description": "Earn money with the math game and Wordle chores"},
    {"name": "Leaderboard", "route_path": "/leaderboard", "icon": "🏆",
     "description": "Top earners and game high scores"},
    {"name": "Doubles Day", "route_path": DOUBLES_DAY_ROUTE_PATH, "icon": "✖️",
     "description": "Doubles Wordle and job challenge earnings while enabled",
     "enabled": False},
]


def steps(m: Migration) -> None:
    m.create_table(Plugin.__table__)
    m.insert_missing(
        Plugin.__table__,
        "name",
        [{"enabled": True, **plugin} for plugin in DEFAULT_PLUGINS],
    )


def run(database_url=None) -> None:
    run_migration(NAME, steps, database_url)


def main(argv=None) -> None:
    cli(NAME, steps, __doc__, argv)


if __name__ == "__main__":
    main()
