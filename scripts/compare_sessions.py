"""
Compare the React component trees of two browser sessions.

Run:
    python scripts/compare_sessions.py [--root COMPONENT] URL_A URL_B [LABEL_A LABEL_B]

Each URL is opened in its own browser context (separate cookies/storage),
both fiber trees are captured once the page is idle, and the tree of the
first session is printed with the state/props differences against the
second one. With --root, both trees start at the first component of that
name (e.g. App) instead of the React host root.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

from playwright.async_api import Browser, async_playwright

# Allow running from repo root without installing
sys.path.insert(0, str(Path(__file__).parent.parent))

from fiberlens import FiberLens, Snapshot

_USAGE = "usage: compare_sessions.py [--root COMPONENT] URL_A URL_B [LABEL_A LABEL_B]"


async def capture_session(
    browser: Browser, lens: FiberLens, url: str, root_component: str | None = None
) -> Snapshot | None:
    context = await browser.new_context()
    try:
        page = await context.new_page()
        await page.goto(url, wait_until="networkidle")
        return await lens.capture(page, root_component=root_component)
    finally:
        await context.close()


async def main(argv: list[str]) -> int:
    root_component = None
    if argv[:1] == ["--root"] and len(argv) > 1:
        root_component, argv = argv[1], argv[2:]
    if len(argv) not in (2, 4):
        print(_USAGE, file=sys.stderr)
        return 2

    url_a, url_b = argv[0], argv[1]
    label_a, label_b = (argv[2], argv[3]) if len(argv) == 4 else ("A", "B")
    lens = FiberLens(left_label=label_a, right_label=label_b)

    async with async_playwright() as p:
        browser = await p.chromium.launch()
        try:
            tree_a = await capture_session(browser, lens, url_a, root_component)
            tree_b = await capture_session(browser, lens, url_b, root_component)
        finally:
            await browser.close()

    diffs = lens.report(tree_a, tree_b)
    print(f"\n{len(diffs)} differing component(s)")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    sys.exit(asyncio.run(main(sys.argv[1:])))
