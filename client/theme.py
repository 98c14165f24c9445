from client.storage import THEME_KEY, LocalStorage

THEMES = ("light", "dark", "system")
DEFAULT_THEME = "system"


class ThemePreference:
    def __init__(self, storage: LocalStorage):
        self.storage = storage
        self.theme = DEFAULT_THEME

    def load(self) -> str:
        saved = self.storage.get_item(THEME_KEY)
        if saved in THEMES:
            self.theme = saved
        return self.theme

    def set_theme(self, theme: str) -> None:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme: {theme}")
        self.theme = theme
        self.storage.set_item(THEME_KEY, theme)

    def is_dark(self, system_scheme: str = "light") -> bool:
        if self.theme == "system":
            return system_scheme == "dark"
        return self.theme == "dark"
