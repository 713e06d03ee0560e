# townhub/migrations/math_game.py
"""Create the math game session and high score tables."""
from townhub.migrations.runner import Migration, cli, run_migration
from townhub.models.game import MathGameHighScore, MathGameSession

NAME = "math_game"


def steps(m: Migration) -> None:
    m.create_table(MathGameSession.__table__)
    m.create_table(MathGameHighScore.__table__)
    m.add_column("math_game_sessions", "submitted_at", "TIMESTAMP WITH TIME ZONE")
    m.create_index("ix_math_game_sessions_user_id", "math_game_sessions", "user_id")
    m.create_index("ix_math_game_sessions_played_at", "math_game_sessions", "played_at")
    m.create_index("ix_math_game_high_scores_user_id", "math_game_high_scores", "user_id")


def run(database_url=None) -> None:
    run_migration(NAME, steps, database_url)


def main(argv=None) -> None:
    cli(NAME, steps, __doc__, argv)


if __name__ == "__main__":
    main()
