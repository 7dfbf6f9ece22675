"""Numbered screenshots for a single test scenario."""

from pathlib import Path

from playwright.sync_api import Page


def create_folder(folder: str | Path) -> Path:
    """Create a folder (and parents) if it does not exist yet."""
    folder = Path(folder)
    folder.mkdir(parents=True, exist_ok=True)
    return folder


class Screenshot:
    """Writes <folder>/<n>_<name>.png, numbering captures in order."""

    def __init__(self, folder: str | Path):
        self.folder = create_folder(folder)
        self.count = 0

    def take_screenshot(self, page: Page, name: str) -> Path:
        self.count += 1
        filepath = self.folder / f"{self.count}_{name}.png"
        page.screenshot(path=str(filepath))
        return filepath
