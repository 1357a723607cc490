"""Translate a few strings concurrently and print the account balance.

Run with TRANSLATEPLUS_API_KEY set in the environment or a .env file.
"""

import asyncio

from translateplus import ErrorKind, TranslatePlusClient, TranslatePlusError, setup_logging


async def main() -> None:
    setup_logging()

    async with TranslatePlusClient(max_concurrent=3) as client:
        phrases = ["Hello, world!", "How are you?", "See you tomorrow", "Thank you"]
        results = await asyncio.gather(
            *(client.translate(p, target="fr", source="en") for p in phrases)
        )
        for phrase, result in zip(phrases, results):
            print(f"{phrase} -> {result['translations']['translation']}")

        try:
            summary = await client.get_account_summary()
            print(f"Credits remaining: {summary.get('credits_remaining')}")
        except TranslatePlusError as err:
            if err.kind is ErrorKind.AUTHENTICATION:
                print("Check TRANSLATEPLUS_API_KEY")
            else:
                print(f"{err.kind.value}: {err} (status {err.status_code})")


if __name__ == "__main__":
    asyncio.run(main())
