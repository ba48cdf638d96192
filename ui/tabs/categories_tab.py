import customtkinter as ctk
from models.category import Category
from services.category_service import CategoryService
from ui.components.category_form import CategoryForm

_TYPE_COLORS = {"expense": "#F44336", "income": "#4CAF50", "both": "#2196F3"}


class CategoriesTab(ctk.CTkFrame):
    def __init__(self, master, category_service: CategoryService, notify_refresh, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._svc = category_service
        self._notify_refresh = notify_refresh

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        ctk.CTkLabel(bar, text="Categories", font=ctk.CTkFont(size=13, weight="bold")).pack(
            side="left", padx=(12, 16), pady=8
        )
        ctk.CTkButton(bar, text="+ Add Category", command=lambda: self._open_form()).pack(
            side="left", padx=4, pady=6
        )

        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=1, column=0, sticky="nsew", padx=8, pady=8)
        self._scroll.grid_columnconfigure(0, weight=1)
        self._load()

    def refresh(self):
        self._load()

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()
        for idx, cat in enumerate(self._svc.get_all()):
            self._add_row(idx, cat, self._svc.usage_count(cat.name))

    def _add_row(self, idx, cat: Category, used: int):
        row = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=8)
        row.grid(row=idx, column=0, sticky="ew", padx=4, pady=3)
        row.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            row, text="", width=28, height=28, corner_radius=4, fg_color=cat.color_hex,
        ).grid(row=0, column=0, padx=(10, 0), pady=8)
        name = cat.name + ("  (built-in)" if cat.is_system else "")
        ctk.CTkLabel(row, text=name, font=ctk.CTkFont(size=13, weight="bold"), anchor="w").grid(
            row=0, column=1, padx=8, sticky="w"
        )
        ctk.CTkLabel(
            row, text=f"{used} transaction{'s' if used != 1 else ''}",
            width=110, text_color="gray60",
        ).grid(row=0, column=2, padx=4)
        ctk.CTkLabel(
            row, text=cat.type, width=70,
            text_color=_TYPE_COLORS.get(cat.type, "#888888"),
            font=ctk.CTkFont(size=11, weight="bold"),
        ).grid(row=0, column=3, padx=4)
        ctk.CTkButton(
            row, text="Edit", width=60, height=26,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda c=cat: self._open_form(c),
        ).grid(row=0, column=4, padx=(4, 10), pady=6)

    def _open_form(self, category: Category | None = None):
        form = CategoryForm(self.winfo_toplevel(), self._svc, category=category)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("category")
