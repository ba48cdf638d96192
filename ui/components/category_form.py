import customtkinter as ctk
from tkinter import colorchooser
from models.category import Category
from services.category_service import CategoryService
from ui.components.dialog import FormDialog

CATEGORY_TYPES = ["expense", "income", "both"]
_HEX_LENGTHS = (4, 7)


class CategoryForm(FormDialog):
    """Add or edit a category. System categories keep their name."""

    def __init__(
        self,
        master,
        category_service: CategoryService,
        category: Category | None = None,
        **kwargs,
    ):
        super().__init__(master, "Edit Category" if category else "New Category", **kwargs)
        self._svc = category_service
        self._category = category
        locked = bool(category and category.is_system)

        self._name_var = ctk.StringVar(value=category.name if category else "")
        self._field("Name:", ctk.CTkEntry(
            self, textvariable=self._name_var, width=220,
            state="disabled" if locked else "normal",
        ))
        self._type_var = self._combo(
            "Type:", CATEGORY_TYPES, category.type if category else "expense"
        )

        color_row = ctk.CTkFrame(self, fg_color="transparent")
        self._color_var = ctk.StringVar(value=category.color_hex if category else "#888888")
        entry = ctk.CTkEntry(color_row, textvariable=self._color_var, width=100)
        entry.pack(side="left")
        entry.bind("<FocusOut>", self._sync_swatch)
        self._swatch = ctk.CTkLabel(
            color_row, text="", width=32, height=24, corner_radius=4,
            fg_color=self._color_var.get(),
        )
        self._swatch.pack(side="left", padx=(8, 0))
        ctk.CTkButton(
            color_row, text="Pick", width=60,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._pick_color,
        ).pack(side="left", padx=(8, 0))
        self._field("Color:", color_row)

        if locked:
            ctk.CTkLabel(
                self, text="Built-in category: name is fixed and it cannot be deleted.",
                text_color="gray60", anchor="w",
            ).grid(row=self._row, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
            self._row += 1

        self._finish(on_delete=self._on_delete if category and not locked else None)

    def _color(self) -> str:
        color = self._color_var.get().strip()
        return color if color.startswith("#") else "#" + color

    def _pick_color(self):
        result = colorchooser.askcolor(color=self._color(), parent=self, title="Category Color")
        if result and result[1]:
            self._color_var.set(result[1])
            self._swatch.configure(fg_color=result[1])

    def _sync_swatch(self, _event=None):
        color = self._color()
        if len(color) in _HEX_LENGTHS and all(c in "0123456789abcdefABCDEF" for c in color[1:]):
            self._swatch.configure(fg_color=color)

    def _on_save(self):
        name, type_, color = self._name_var.get(), self._type_var.get(), self._color()
        if self._category:
            self._svc.update(self._category.id, name, type_, color)
        else:
            self._svc.create(name, type_, color)

    def _on_delete(self):
        self._svc.delete(self._category.id)
