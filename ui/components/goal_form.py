import customtkinter as ctk
from tkinter import colorchooser
from models.saving_goal import SavingGoal
from services.saving_goal_service import SavingGoalService
from ui.components.dialog import FormDialog, parse_amount
from utils.date_helpers import parse_display_date, format_date, format_display_date


class GoalForm(FormDialog):
    """Add or edit a saving goal."""

    def __init__(
        self,
        master,
        goal_service: SavingGoalService,
        goal: SavingGoal | None = None,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(master, "Edit Goal" if goal else "New Goal", **kwargs)
        self._svc = goal_service
        self._goal = goal
        self._date_format = date_format

        self._name_var = self._entry("Name:", goal.name if goal else "")
        self._target_var = self._entry("Target:", f"{goal.target_amount:.2f}" if goal else "")
        # optional, so a plain entry rather than a picker
        self._deadline_var = self._entry(
            f"Deadline ({date_format}):",
            format_display_date(goal.deadline, date_format) if goal and goal.deadline else "",
        )
        self._desc_var = self._entry("Description:", goal.description if goal else "")

        self._color = goal.color_hex if goal else "#009688"
        self._color_btn = self._field("Color:", ctk.CTkButton(
            self, text="", width=60, fg_color=self._color, hover_color=self._color,
            command=self._pick_color,
        ))
        self._finish(on_delete=self._on_delete if goal else None)

    def _pick_color(self):
        result = colorchooser.askcolor(color=self._color, parent=self, title="Goal Color")
        if result and result[1]:
            self._color = result[1]
            self._color_btn.configure(fg_color=self._color, hover_color=self._color)

    def _on_save(self):
        raw_deadline = self._deadline_var.get().strip()
        deadline = None
        if raw_deadline:
            d = parse_display_date(raw_deadline, self._date_format)
            if d is None:
                raise ValueError("Invalid deadline.")
            deadline = format_date(d)
        fields = dict(
            name=self._name_var.get(),
            target_amount=parse_amount(self._target_var.get()),
            description=self._desc_var.get(),
            deadline=deadline,
            color_hex=self._color,
        )
        if self._goal:
            self._svc.update(self._goal.id, **fields)
        else:
            self._svc.create(**fields)

    def _on_delete(self):
        self._svc.delete(self._goal.id)


class ContributionForm(FormDialog):
    def __init__(self, master, goal_service: SavingGoalService, goal: SavingGoal, **kwargs):
        super().__init__(master, f"Add to {goal.name}", **kwargs)
        self._svc = goal_service
        self._goal = goal
        self._amount_var = self._entry("Amount:", f"{goal.remaining:.2f}")
        self._finish(save_text="Contribute")

    def _on_save(self):
        self._svc.contribute(self._goal.id, parse_amount(self._amount_var.get()))
