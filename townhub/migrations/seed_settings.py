# townhub/migrations/seed_settings.py
"""Create the bank_settings table and insert default settings that are missing."""
from townhub.migrations.runner import Migration, cli, run_migration
from townhub.models.setting import BankSetting
from townhub.services.settings_service import DEFAULT_SETTINGS

NAME = "seed_settings"


def steps(m: Migration) -> None:
    m.create_table(BankSetting.__table__)
    m.insert_missing(
        BankSetting.__table__,
        "setting_key",
        [
            {"setting_key": key, "setting_value": value, "description": description}
            for key, (value, description) in DEFAULT_SETTINGS.items()
        ],
    )


def run(database_url=None) -> None:
    run_migration(NAME, steps, database_url)


def main(argv=None) -> None:
    cli(NAME, steps, __doc__, argv)


if __name__ == "__main__":
    main()
