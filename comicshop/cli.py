"""
Console front-end for the comic shop.

Runs a numbered menu loop over a ComicRegistry. Each data-entry flow
prompts for its fields in order and prints the registry's outcome.

Run with `comicshop` or `python -m comicshop.cli`.
"""

import argparse
import logging
from collections.abc import Callable
from pathlib import Path

from comicshop.config import Settings, settings
from comicshop.models.comic import Comic, ComicStatus
from comicshop.models.failure import MissingFieldError, OperationResult
from comicshop.models.user import User
from comicshop.services.registry import ComicRegistry

logger = logging.getLogger(__name__)

MENU = """
--- ComicShop Menu ---
1. List comics in inventory
2. Find comic by ID
3. Register sale/reservation
4. Mark comic as available (cancel reservation/return)
5. Add new comic
6. Remove comic
------------------------------------
7. List users (by ID)
8. List users (by name)
9. Add new user
0. Exit"""

EXIT_OPTION = 0

YES_ANSWERS = {"s", "si", "sí", "y", "yes"}


class ConsoleApp:
    """Menu loop dispatching operator commands to a registry."""

    def __init__(
        self,
        registry: ComicRegistry,
        input_func: Callable[[str], str] | None = None,
        output: Callable[[str], None] | None = None,
    ):
        self.registry = registry
        self._input = input_func or input
        self._output = output or print
        self._handlers: dict[int, Callable[[], None]] = {
            1: self.list_comics,
            2: self.find_comic,
            3: self.sell,
            4: self.mark_available,
            5: self.add_comic,
            6: self.remove_comic,
            7: self.list_users,
            8: self.list_users_by_name,
            9: self.add_user,
        }

    def ask(self, prompt: str) -> str:
        return self._input(prompt)

    def say(self, text: str) -> None:
        self._output(text)

    def report(self, result: OperationResult, error_prefix: str) -> None:
        """Print the outcome of a registry operation."""
        if result.ok:
            if result.message:
                self.say(result.message)
        elif result.failure is not None:
            self.say(f"{error_prefix}: {result.failure.message}")
            if result.failure.suggestion:
                self.say(result.failure.suggestion)
        for warning in result.warnings:
            self.say(f"Warning: {warning.message}")
            if warning.detail:
                self.say(f"  {warning.detail}")

    def run(self) -> None:
        """Show the menu until the operator chooses exit or input ends."""
        while True:
            self.say(MENU)
            try:
                raw = self.ask("Select an option: ")
            except EOFError:
                self.say("")
                break

            try:
                option = int(raw.strip())
            except ValueError:
                self.say("Invalid input. Please enter a number.")
                continue

            if option == EXIT_OPTION:
                self.say("Leaving ComicShop. See you soon!")
                break

            handler = self._handlers.get(option)
            if handler is None:
                self.say("Invalid option. Please try again.")
                continue

            try:
                handler()
            except EOFError:
                self.say("")
                break
            except Exception as e:
                logger.exception("Menu option %d failed", option)
                self.say(f"An unexpected error occurred: {e}")

    # --- Comics ---

    def list_comics(self) -> None:
        comics = self.registry.list_comics()
        if not comics:
            self.say("The comic inventory is empty.")
            return
        self.say("\n--- Comics in Inventory ---")
        for comic in comics:
            self.say(str(comic))
        self.say("---------------------------")

    def find_comic(self) -> None:
        comic_id = self.ask("Enter the ID of the comic to find: ")
        comic = self.registry.find_comic_by_id(comic_id)
        if comic is None:
            self.say(f"Comic with ID '{comic_id}' not found.")
        else:
            self.say(f"Comic found: {comic}")

    def sell(self) -> None:
        comic_id = self.ask("Enter the ID of the comic to sell/reserve: ")
        user_id = self.ask("Enter the ID of the buying/reserving user: ")
        answer = self.ask("Is this a reservation? (y/N): ")
        reserve = answer.strip().lower() in YES_ANSWERS

        result = self.registry.sell(comic_id, user_id, reserve=reserve)
        self.report(result, "Error registering sale/reservation")

    def mark_available(self) -> None:
        comic_id = self.ask("Enter the ID of the comic to mark as available: ")
        result = self.registry.mark_available(comic_id)
        self.report(result, "Error marking as available")

    def add_comic(self) -> None:
        comic_id = self.ask("Enter the ID of the new comic: ")
        title = self.ask("Enter the comic title: ")
        author = self.ask("Enter the comic author: ")

        try:
            comic = Comic(title=title, author=author, id=comic_id, status=ComicStatus.AVAILABLE)
        except ValueError as e:
            self.report(MissingFieldError(str(e)).to_result(), "Error adding comic")
            return

        self.report(self.registry.add_comic(comic), "Error adding comic")

    def remove_comic(self) -> None:
        comic_id = self.ask("Enter the ID of the comic to remove: ")
        self.report(self.registry.remove_comic(comic_id), "Error removing comic")

    # --- Users ---

    def _print_users(self, users: list[User], heading: str) -> None:
        if not users:
            self.say("There are no registered users.")
            return
        self.say(f"\n--- {heading} ---")
        for user in users:
            self.say(str(user))
        self.say("------------------------------------")

    def list_users(self) -> None:
        self._print_users(self.registry.list_users(), "Users (by ID)")

    def list_users_by_name(self) -> None:
        self._print_users(self.registry.list_users_by_name(), "Users (by name)")

    def add_user(self) -> None:
        user_id = self.ask("Enter the ID of the new user: ")
        name = self.ask("Enter the name of the new user: ")
        email = self.ask("Enter the user's email (optional, press Enter to skip): ")

        try:
            user = User(id=user_id, name=name, email=email or None)
        except ValueError as e:
            self.report(MissingFieldError(str(e)).to_result(), "Error adding user")
            return

        self.report(self.registry.add_user(user), "Error adding user")


def build_settings(args: argparse.Namespace, base: Settings) -> Settings:
    """Apply command-line overrides on top of environment settings."""
    overrides: dict[str, object] = {}
    if args.data_dir is not None:
        overrides["data_dir"] = args.data_dir
    if args.comics_csv is not None:
        overrides["comics_file"] = args.comics_csv
    if args.users_csv is not None:
        overrides["users_file"] = args.users_csv
    if args.sales_log is not None:
        overrides["sales_log_file"] = args.sales_log
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    return base.model_copy(update=overrides)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Comic shop inventory and customer registry")
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory holding the CSV files and transaction log",
    )
    parser.add_argument(
        "--comics-csv",
        help="Inventory file name inside the data directory",
    )
    parser.add_argument(
        "--users-csv",
        help="User file name inside the data directory",
    )
    parser.add_argument(
        "--sales-log",
        help="Transaction log file name inside the data directory",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for diagnostic output",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = parse_args(argv)
    config = build_settings(args, settings)

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    registry = ComicRegistry.from_settings(config)
    logger.info(
        "%s started with %d comics and %d users",
        config.app_name,
        len(registry),
        registry.user_count,
    )
    ConsoleApp(registry).run()


if __name__ == "__main__":
    main()
