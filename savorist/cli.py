"""Command-line interface for Savorist - HTTP client for the server API."""

import asyncio
import logging
import shlex
import sys
from datetime import date

from savorist.client import (
    FavoritesStore,
    FileKeyValueStore,
    ProfileStore,
    SavoristClient,
)
from savorist.config import get_config, setup_logging
from savorist.errors import ApiError
from savorist.models import Restaurant, Review, ReviewCreate

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  list | trending | nearby          Browse restaurants
  search <text>                     Match name or cuisine
  filter [cuisine=X] [rating=N] [price=P]
  show <n|id>                       Details and reviews
  review <n|id> <1-5> [comment]     Post a review as your profile name
  fav <n|id>                        Toggle a favorite
  favorites                         List your favorites
  profile                           Show your profile
  name <display name>               Change your display name
  notifications on|off              Change notification preference
  help | quit"""


def format_restaurant(index: int, restaurant: Restaurant, favorite: bool) -> str:
    heart = "♥" if favorite else " "
    trending = " 🔥" if restaurant.is_trending else ""
    return (
        f"{index:>2}. {heart} {restaurant.name} - {restaurant.cuisine_type} "
        f"★ {restaurant.rating:.1f} ({restaurant.review_count}) "
        f"{restaurant.price_range or ''} {restaurant.distance or ''}{trending}"
    )


def format_review(review: Review) -> str:
    comment = f"\n      {review.comment}" if review.comment else ""
    return f"    {'★' * review.rating} {review.reviewer_name} ({review.date or '-'}){comment}"


class SavoristCLI:
    """Command-line interface for the Savorist system - HTTP client."""

    def __init__(self) -> None:
        """Initialize the CLI."""
        self.config = get_config()
        setup_logging(self.config)

        self.storage = FileKeyValueStore(self.config.preferences_dir)
        self.last_results: list[Restaurant] = []

        logger.info("Savorist CLI initialized as HTTP client")
        self._display_config_status()

    def _display_config_status(self) -> None:
        """Display configuration status to the user."""
        print("\n" + "=" * 60)
        print("SAVORIST - Restaurant Discovery")
        print("\n" + "=" * 60)
        print(f"server: {self.config.server_url}")
        print(f"preferences: {self.config.preferences_dir}")
        print("\n" + "=" * 60 + "\n")

    def run(self) -> None:
        """Run the CLI application."""
        print("Welcome! Type 'help' for the list of commands.")
        print("Type 'quit' or 'exit' to end the session.\n")

        while True:
            try:
                user_input = input("\nsavorist> ").strip()

                if not user_input:
                    continue

                if user_input.lower() in ["quit", "exit", "q"]:
                    print("\nGoodbye!")
                    break

                asyncio.run(self.handle(user_input))

            except KeyboardInterrupt:
                print("\n\nExiting Savorist. Goodbye!")
                break
            except Exception as e:
                logger.error(f"Unexpected error: {e}", exc_info=True)
                print(f"\n⚠ An unexpected error occurred: {e}")

    async def handle(self, line: str) -> None:
        """Parse and execute one command line."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            print(f"⚠ {e}")
            return

        command, args = parts[0].lower(), parts[1:]
        handler = getattr(self, f"_cmd_{command}", None)
        if handler is None:
            print(f"Unknown command '{command}'. Type 'help'.")
            return

        async with SavoristClient(
            self.config.server_url, self.config.request_timeout
        ) as client:
            try:
                await handler(client, args)
            except ApiError as e:
                print(f"\n⚠ {e}")

    def _resolve(self, ref: str) -> str:
        """Turn a list number from the last listing into a restaurant id."""
        if ref.isdigit() and 1 <= int(ref) <= len(self.last_results):
            return self.last_results[int(ref) - 1].id
        return ref

    async def _show_list(self, restaurants: list[Restaurant]) -> None:
        self.last_results = restaurants
        if not restaurants:
            print("No restaurants found.")
            return
        favorites = set(await FavoritesStore(self.storage).get_favorites())
        for index, restaurant in enumerate(restaurants, start=1):
            print(format_restaurant(index, restaurant, restaurant.id in favorites))

    async def _cmd_help(self, _client: SavoristClient, _args: list[str]) -> None:
        print(HELP_TEXT)

    async def _cmd_list(self, client: SavoristClient, _args: list[str]) -> None:
        await self._show_list(await client.list_restaurants())

    async def _cmd_trending(self, client: SavoristClient, _args: list[str]) -> None:
        await self._show_list(await client.trending())

    async def _cmd_nearby(self, client: SavoristClient, _args: list[str]) -> None:
        await self._show_list(await client.nearby())

    async def _cmd_search(self, client: SavoristClient, args: list[str]) -> None:
        await self._show_list(await client.search(" ".join(args)))

    async def _cmd_filter(self, client: SavoristClient, args: list[str]) -> None:
        options = dict(arg.split("=", 1) for arg in args if "=" in arg)
        rating = options.get("rating")
        try:
            min_rating = float(rating) if rating else None
        except ValueError:
            print("⚠ rating must be a number")
            return
        await self._show_list(
            await client.filter(
                cuisine_type=options.get("cuisine"),
                min_rating=min_rating,
                price_range=options.get("price"),
            )
        )

    async def _cmd_show(self, client: SavoristClient, args: list[str]) -> None:
        if not args:
            print("Usage: show <n|id>")
            return
        restaurant = await client.get_restaurant(self._resolve(args[0]))
        if restaurant is None:
            print("Restaurant not found.")
            return

        favorite = await FavoritesStore(self.storage).is_favorite(restaurant.id)
        print(f"\n{restaurant.name}{' ♥' if favorite else ''}")
        print(f"  {restaurant.cuisine_type} · ★ {restaurant.rating:.1f} · {restaurant.price_range or ''}")
        for value in (restaurant.address, restaurant.phone, restaurant.description):
            if value:
                print(f"  {value}")
        print(f"  id: {restaurant.id}")

        reviews = await client.get_reviews(restaurant.id)
        print(f"\n  Reviews ({len(reviews)}):")
        for review in reviews:
            print(format_review(review))

    async def _cmd_review(self, client: SavoristClient, args: list[str]) -> None:
        if len(args) < 2 or not args[1].isdigit():
            print("Usage: review <n|id> <1-5> [comment]")
            return
        rating = int(args[1])
        if not 1 <= rating <= 5:
            print("⚠ rating must be between 1 and 5")
            return

        profile = await ProfileStore(self.storage).load_profile()
        review = await client.post_review(
            self._resolve(args[0]),
            ReviewCreate(
                reviewer_name=profile.display_name,
                rating=rating,
                comment=" ".join(args[2:]) or None,
                date=date.today().strftime("%d %b %Y"),
            ),
        )
        print("✓ Review posted")
        print(format_review(review))

    async def _cmd_fav(self, _client: SavoristClient, args: list[str]) -> None:
        if not args:
            print("Usage: fav <n|id>")
            return
        restaurant_id = self._resolve(args[0])
        now_favorite = await FavoritesStore(self.storage).toggle_favorite(restaurant_id)
        print("♥ Added to favorites" if now_favorite else "Removed from favorites")

    async def _cmd_favorites(self, client: SavoristClient, _args: list[str]) -> None:
        ids = await FavoritesStore(self.storage).get_favorites()
        if not ids:
            print("No favorites yet. Save restaurants with 'fav <n>'.")
            return
        restaurants = await client.list_restaurants()
        await self._show_list([r for r in restaurants if r.id in ids])

    async def _cmd_profile(self, _client: SavoristClient, _args: list[str]) -> None:
        profile = await ProfileStore(self.storage).load_profile()
        print(f"Name: {profile.display_name}")
        print(f"Notifications: {'on' if profile.notifications_enabled else 'off'}")

    async def _cmd_name(self, _client: SavoristClient, args: list[str]) -> None:
        profile = await ProfileStore(self.storage).update_profile(
            display_name=" ".join(args)
        )
        print(f"✓ Display name set to {profile.display_name}")

    async def _cmd_notifications(self, _client: SavoristClient, args: list[str]) -> None:
        if not args or args[0].lower() not in ("on", "off"):
            print("Usage: notifications on|off")
            return
        profile = await ProfileStore(self.storage).update_profile(
            notifications_enabled=args[0].lower() == "on"
        )
        print(f"✓ Notifications {'on' if profile.notifications_enabled else 'off'}")


def main() -> None:
    """Main entry point for the CLI."""
    try:
        # Validate configuration by attempting to load it
        get_config()
    except Exception as e:
        print(f"Configuration error: {e}")
        print("\nCheck the environment variables or the .env file.")
        sys.exit(1)

    cli = SavoristCLI()
    cli.run()


if __name__ == "__main__":
    main()
