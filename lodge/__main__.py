import asyncio
import contextlib

from lodge.application.runtime import serve


def main() -> None:
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(serve())


if __name__ == "__main__":
    main()
