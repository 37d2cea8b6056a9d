"""Dialog for opening an existing project or creating a new one."""

from __future__ import annotations

from typing import Callable, Optional

from .commands import BackendClient, CommandError
from .models import ProjectMeta

TABS = ("existing", "new")


def format_date(raw: str) -> str:
    """The date part of an ISO timestamp."""
    return raw.partition("T")[0]


class ProjectDialog:
    """Project list, new-project form and the primary action between them."""

    def __init__(
        self,
        client: BackendClient,
        on_close: Callable[[], None],
        on_create: Callable[[str, Optional[str]], None],
        on_load: Callable[[str], None],
    ) -> None:
        self.client = client
        self.on_close = on_close
        self.on_create = on_create
        self.on_load = on_load
        self.active_tab = "existing"
        self.new_name = ""
        self.new_author = ""
        self.is_loading = False
        self.projects: list[ProjectMeta] = []
        self.selected: Optional[str] = None

    async def refresh(self) -> list[ProjectMeta]:
        """Reload the project list; a failure leaves it empty."""
        self.is_loading = True
        try:
            self.projects = await self.client.list_projects()
        except CommandError:
            self.projects = []
        finally:
            self.is_loading = False
        return self.projects

    def select_tab(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"unknown tab {tab!r}")
        self.active_tab = tab

    def select(self, project_id: str) -> None:
        self.selected = project_id

    def primary_label(self) -> str:
        return "Load Project" if self.active_tab == "existing" else "Create Project"

    def primary_disabled(self) -> bool:
        if self.active_tab == "existing":
            return self.selected is None
        return not self.new_name.strip()

    def submit(self) -> bool:
        """Load or create depending on the tab; return whether anything happened."""
        if self.active_tab == "existing":
            if self.selected is None:
                return False
            self.on_load(self.selected)
            self.on_close()
            return True
        if not self.new_name.strip():
            return False
        author = self.new_author if self.new_author.strip() else None
        self.on_create(self.new_name, author)
        self.on_close()
        return True