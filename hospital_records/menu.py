"""Main menu layout for the hospital records console."""

from enum import Enum


class MenuChoice(Enum):
    """Numbered operations offered by the main menu."""
    ADD_PATIENT = 1
    VIEW_PATIENTS = 2
    SEARCH_PATIENT_BY_ID = 3
    SEARCH_PATIENT_BY_NAME = 4
    DELETE_PATIENT = 5
    SORT_PATIENTS = 6
    ADD_DOCTOR = 7
    VIEW_DOCTORS = 8
    ADD_DISEASE = 9
    VIEW_DISEASES = 10
    SCHEDULE_APPOINTMENT = 11
    VIEW_APPOINTMENTS = 12
    CANCEL_APPOINTMENT = 13
    SAVE = 14
    EXIT = 15


MENU_LABELS = {
    MenuChoice.ADD_PATIENT: "Add Patient (Full Intake)",
    MenuChoice.VIEW_PATIENTS: "View All Patients",
    MenuChoice.SEARCH_PATIENT_BY_ID: "Search Patient by ID",
    MenuChoice.SEARCH_PATIENT_BY_NAME: "Search Patient by Name",
    MenuChoice.DELETE_PATIENT: "Delete Patient",
    MenuChoice.SORT_PATIENTS: "Sort Patients by Name",
    MenuChoice.ADD_DOCTOR: "Add Doctor",
    MenuChoice.VIEW_DOCTORS: "View Doctors",
    MenuChoice.ADD_DISEASE: "Add Disease (Reference)",
    MenuChoice.VIEW_DISEASES: "View Diseases (Reference)",
    MenuChoice.SCHEDULE_APPOINTMENT: "Schedule Appointment",
    MenuChoice.VIEW_APPOINTMENTS: "View Appointments",
    MenuChoice.CANCEL_APPOINTMENT: "Cancel Appointment",
    MenuChoice.SAVE: "Save Data Now",
    MenuChoice.EXIT: "Exit",
}

MENU_SECTIONS = {
    "Patient Management": [
        MenuChoice.ADD_PATIENT,
        MenuChoice.VIEW_PATIENTS,
        MenuChoice.SEARCH_PATIENT_BY_ID,
        MenuChoice.SEARCH_PATIENT_BY_NAME,
        MenuChoice.DELETE_PATIENT,
        MenuChoice.SORT_PATIENTS,
    ],
    "Staff & Reference": [
        MenuChoice.ADD_DOCTOR,
        MenuChoice.VIEW_DOCTORS,
        MenuChoice.ADD_DISEASE,
        MenuChoice.VIEW_DISEASES,
    ],
    "Scheduling": [
        MenuChoice.SCHEDULE_APPOINTMENT,
        MenuChoice.VIEW_APPOINTMENTS,
        MenuChoice.CANCEL_APPOINTMENT,
    ],
    "System": [
        MenuChoice.SAVE,
        MenuChoice.EXIT,
    ],
}


def get_menu_choice(number: int) -> MenuChoice | None:
    """Map a typed number to a menu choice, or None if it is not on the menu."""
    try:
        return MenuChoice(number)
    except ValueError:
        return None


def render_menu() -> str:
    """Menu text with rich markup."""
    lines = [
        "[cyan]============================================[/cyan]",
        "[cyan]    Hospital Management System[/cyan]",
        "[cyan]============================================[/cyan]",
    ]
    for section, choices in MENU_SECTIONS.items():
        lines.append(f"\n[yellow]{section}[/yellow]")
        for choice in choices:
            lines.append(f"[blue] {choice.value}.[/blue] {MENU_LABELS[choice]}")
    return "\n".join(lines)
