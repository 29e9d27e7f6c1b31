"""Hospital records console with a numbered menu workflow."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from hospital_records.intake import (
    AppointmentRequest,
    DiseaseIntake,
    DoctorIntake,
    PatientIntake,
    is_confirmed,
    parse_int,
)
from hospital_records.menu import MenuChoice, get_menu_choice, render_menu
from hospital_records.records import (
    AppointmentRepository,
    AssignmentResult,
    DiseaseRepository,
    DoctorRepository,
    HospitalStore,
    PatientRepository,
    load_store,
    save_store,
)
from hospital_records.records.storage import set_aside
from hospital_records.records.errors import (
    CapacityExceededError,
    CorruptDataError,
    InvalidInputError,
    RecordError,
    StorageError,
)
from hospital_records.records.models import Patient

load_dotenv(override=True)

LOG_LEVEL = os.environ.get("HMS_LOG_LEVEL", "WARNING")

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class Session:
    """The loaded store and where it is saved."""
    store: HospitalStore = field(default_factory=HospitalStore)
    data_path: Path | None = None
    save_on_exit: bool = True

    @property
    def patients(self) -> PatientRepository:
        return PatientRepository(self.store)

    @property
    def doctors(self) -> DoctorRepository:
        return DoctorRepository(self.store)

    @property
    def diseases(self) -> DiseaseRepository:
        return DiseaseRepository(self.store)

    @property
    def appointments(self) -> AppointmentRepository:
        return AppointmentRepository(self.store)


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


# Input helpers

def ask(prompt: str) -> str:
    return console.input(prompt).strip()


def ask_int(prompt: str) -> int:
    """Prompt until the operator types a valid integer."""
    while True:
        try:
            return parse_int(console.input(prompt))
        except InvalidInputError as e:
            console.print(f"[red]{e}[/red]")


def ask_id(prompt: str) -> int | None:
    """Prompt for a record ID; None (after a message) if it cannot be valid."""
    record_id = ask_int(prompt)
    if record_id <= 0:
        console.print("[red]Invalid ID.[/red]")
        return None
    return record_id


def ensure_capacity(collection) -> None:
    if collection.is_full:
        raise CapacityExceededError(collection.name, collection.capacity)


# Display helpers

def doctor_label(session: Session, patient: Patient) -> str:
    if not patient.has_doctor:
        return "[red]Not Assigned[/red]"
    name = session.doctors.resolve_name(patient.doctor_id)
    return f"{name} (ID: {patient.doctor_id})"


def print_doctors(session: Session) -> None:
    doctors = session.doctors.list_all()
    if not doctors:
        console.print("[yellow]No doctors added yet.[/yellow]")
        return
    table = Table(title="Doctor List", title_style="magenta")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Specialization")
    table.add_column("Phone")
    for d in doctors:
        table.add_row(str(d.id), d.name, d.specialization, d.phone)
    console.print(table)


def print_patient(session: Session, patient: Patient) -> None:
    console.print(f"ID: {patient.id}")
    console.print(f"Name: {patient.name}")
    console.print(f"Age: {patient.age}")
    console.print(f"Gender: {patient.gender}")
    console.print(f"Phone: {patient.phone}")
    console.print(f"[yellow]Disease: {patient.disease}[/yellow]")
    console.print(f"Doctor: {doctor_label(session, patient)}")


# Menu handlers

def handle_add_patient(session: Session) -> None:
    """Full intake: patient details, condition, then doctor assignment."""
    ensure_capacity(session.store.patients)

    console.print("\n[cyan]--- New Patient Registration ---[/cyan]")
    name = ask("Enter patient name: ")
    age = ask_int("Enter age: ")
    gender = ask("Enter gender: ")
    phone = ask("Enter phone number: ")

    console.print("\n[cyan]--- Diagnosis & Assignment ---[/cyan]")
    disease = ask("Enter patient's disease/condition: ")

    intake = PatientIntake(name=name, age=age, gender=gender, phone=phone, disease=disease)
    patient = session.patients.create(**intake.model_dump())

    if session.doctors.list_all():
        console.print("\n[yellow]--- Assign a Doctor ---[/yellow]")
        print_doctors(session)
        doctor_id = ask_int("Enter Doctor ID to assign (or 0 for none): ")
        result = session.patients.assign_doctor(patient.id, doctor_id)
        if result == AssignmentResult.ASSIGNED:
            console.print(f"[green]Doctor (ID: {doctor_id}) assigned.[/green]")
        elif result == AssignmentResult.UNKNOWN_DOCTOR:
            console.print(f"[red]No doctor found with ID {doctor_id}. Patient assigned 'None'.[/red]")
        else:
            console.print("[yellow]Patient assigned 'None'.[/yellow]")
    else:
        console.print("[yellow]No doctors in system. Patient assigned 'None'.[/yellow]")

    console.print(f"\n[green]Patient added successfully! (ID: {patient.id})[/green]")


def handle_view_patients(session: Session) -> None:
    patients = session.patients.list_all()
    if not patients:
        console.print("[yellow]No patients available.[/yellow]")
        return
    table = Table(title="Patient List", title_style="magenta")
    for column in ("ID", "Name", "Age", "Gender", "Phone", "Disease", "Doctor"):
        table.add_column(column)
    for p in patients:
        table.add_row(
            str(p.id), p.name, str(p.age), p.gender, p.phone, p.disease,
            doctor_label(session, p),
        )
    console.print(table)


def handle_search_by_id(session: Session) -> None:
    patient_id = ask_id("\nEnter patient ID to search: ")
    if patient_id is None:
        return
    patient = session.patients.get_by_id(patient_id)
    if patient is None:
        console.print(f"[yellow]Patient with ID {patient_id} not found.[/yellow]")
        return
    console.print("\n[green]Patient Found![/green]")
    print_patient(session, patient)

    appointments = session.appointments.list_for_patient(patient.id)
    if not appointments:
        console.print("Appointments: none")
        return
    console.print("Appointments:")
    for a in appointments:
        doctor = session.doctors.resolve_name(a.doctor_id)
        console.print(f"  ID: {a.id} | {a.date} {a.time} | {doctor}")


def handle_search_by_name(session: Session) -> None:
    name = ask("\nEnter patient name to search: ")
    matches = session.patients.find_by_name(name)
    if not matches:
        console.print(f"[yellow]No patient named '{name}' found.[/yellow]")
        return
    console.print("\n[green]Matches:[/green]")
    for p in matches:
        console.print(f"ID: {p.id} | Name: {p.name} | Disease: {p.disease}")


def handle_delete_patient(session: Session) -> None:
    patient_id = ask_id("\nEnter patient ID to delete: ")
    if patient_id is None:
        return
    patient = session.patients.get_by_id(patient_id)
    if patient is None:
        console.print(f"[yellow]No patient found with ID {patient_id}.[/yellow]")
        return

    reply = console.input(
        f"[yellow]Found: {patient.name}. Are you sure you want to delete? (y/n): [/yellow]"
    )
    if session.patients.delete(patient_id, confirmed=is_confirmed(reply)):
        console.print("[green]Patient deleted successfully.[/green]")
    else:
        console.print("[cyan]Deletion canceled.[/cyan]")


def handle_sort_patients(session: Session) -> None:
    if len(session.store.patients) < 2:
        console.print("[yellow]Not enough patients to sort.[/yellow]")
        return
    session.patients.sort_by_name()
    console.print(
        "[green]Patients sorted by name. Use 'View All Patients' to see the new order.[/green]"
    )


def handle_add_doctor(session: Session) -> None:
    ensure_capacity(session.store.doctors)

    console.print("\n[cyan]--- New Doctor Registration ---[/cyan]")
    intake = DoctorIntake(
        name=ask("Enter doctor name (e.g., Dr. Smith): "),
        specialization=ask("Enter specialization: "),
        phone=ask("Enter phone: "),
    )
    doctor = session.doctors.create(**intake.model_dump())
    console.print(f"[green]Doctor added successfully! (ID: {doctor.id})[/green]")


def handle_view_doctors(session: Session) -> None:
    print_doctors(session)


def handle_add_disease(session: Session) -> None:
    ensure_capacity(session.store.diseases)

    console.print("\n[cyan]--- Add to Disease Reference Database ---[/cyan]")
    intake = DiseaseIntake(
        name=ask("Enter disease name: "),
        symptoms=ask("Enter common symptoms: "),
        treatment=ask("Enter common treatment: "),
    )
    disease = session.diseases.create(**intake.model_dump())
    console.print(f"[green]Disease reference added successfully! (ID: {disease.id})[/green]")


def handle_view_diseases(session: Session) -> None:
    diseases = session.diseases.list_all()
    if not diseases:
        console.print("[yellow]No diseases recorded in reference database.[/yellow]")
        return
    table = Table(title="Disease Reference Database", title_style="magenta")
    for column in ("ID", "Name", "Symptoms", "Treatment"):
        table.add_column(column)
    for d in diseases:
        table.add_row(str(d.id), d.name, d.symptoms, d.treatment)
    console.print(table)


def handle_schedule_appointment(session: Session) -> None:
    ensure_capacity(session.store.appointments)
    if not session.patients.list_all() or not session.doctors.list_all():
        console.print("[yellow]Need at least one patient and one doctor to schedule.[/yellow]")
        return

    console.print("\n[cyan]--- Schedule New Appointment ---[/cyan]")
    patient_id = ask_int("Enter patient ID: ")
    doctor_id = ask_int("Enter doctor ID: ")

    patient = session.patients.get_by_id(patient_id)
    doctor = session.doctors.get_by_id(doctor_id)
    if patient is None or doctor is None:
        console.print("[yellow]Invalid patient or doctor ID.[/yellow]")
        return

    request = AppointmentRequest(
        patient_id=patient_id,
        doctor_id=doctor_id,
        date=ask("Enter date (YYYY-MM-DD): "),
        time=ask("Enter time (HH:MM): "),
    )
    had_doctor = patient.has_doctor
    appointment = session.appointments.schedule(**request.model_dump())

    if not had_doctor:
        console.print(
            f"[cyan]Note: {doctor.name} has been set as the primary doctor for {patient.name}.[/cyan]"
        )
    console.print(
        f"[green]Appointment scheduled (ID: {appointment.id}) for patient {patient.name} "
        f"with {doctor.name} on {appointment.date} {appointment.time}[/green]"
    )


def handle_view_appointments(session: Session) -> None:
    appointments = session.appointments.list_all()
    if not appointments:
        console.print("[yellow]No appointments scheduled.[/yellow]")
        return
    table = Table(title="Appointments", title_style="magenta")
    for column in ("ID", "Patient", "Doctor", "Date", "Time"):
        table.add_column(column)
    for a in appointments:
        info = session.appointments.describe(a)
        table.add_row(
            str(info["id"]),
            f"{info['patient']} (ID: {info['patient_id']})",
            f"{info['doctor']} (ID: {info['doctor_id']})",
            info["date"],
            info["time"],
        )
    console.print(table)


def handle_cancel_appointment(session: Session) -> None:
    appointment_id = ask_id("\nEnter appointment ID to cancel: ")
    if appointment_id is None:
        return
    appointment = session.appointments.get_by_id(appointment_id)
    if appointment is None:
        console.print(f"[yellow]No appointment found with ID {appointment_id}.[/yellow]")
        return

    patient_name = session.patients.resolve_name(appointment.patient_id)
    reply = console.input(
        f"[yellow]Found appointment for {patient_name}. Are you sure? (y/n): [/yellow]"
    )
    if session.appointments.cancel(appointment_id, confirmed=is_confirmed(reply)):
        console.print("[green]Appointment canceled.[/green]")
    else:
        console.print("[cyan]Canceled.[/cyan]")


def handle_save(session: Session) -> None:
    save_store(session.store, session.data_path)
    console.print("[green]Data saved successfully.[/green]")


# Menu handlers mapping
MENU_HANDLERS = {
    MenuChoice.ADD_PATIENT: handle_add_patient,
    MenuChoice.VIEW_PATIENTS: handle_view_patients,
    MenuChoice.SEARCH_PATIENT_BY_ID: handle_search_by_id,
    MenuChoice.SEARCH_PATIENT_BY_NAME: handle_search_by_name,
    MenuChoice.DELETE_PATIENT: handle_delete_patient,
    MenuChoice.SORT_PATIENTS: handle_sort_patients,
    MenuChoice.ADD_DOCTOR: handle_add_doctor,
    MenuChoice.VIEW_DOCTORS: handle_view_doctors,
    MenuChoice.ADD_DISEASE: handle_add_disease,
    MenuChoice.VIEW_DISEASES: handle_view_diseases,
    MenuChoice.SCHEDULE_APPOINTMENT: handle_schedule_appointment,
    MenuChoice.VIEW_APPOINTMENTS: handle_view_appointments,
    MenuChoice.CANCEL_APPOINTMENT: handle_cancel_appointment,
    MenuChoice.SAVE: handle_save,
}


def process_choice(session: Session, choice: MenuChoice) -> bool:
    """Run one menu operation. Returns False when the session should end."""
    if choice == MenuChoice.EXIT:
        return False
    try:
        MENU_HANDLERS[choice](session)
    except RecordError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
    return True


def open_session(data_path: Path | None = None) -> Session:
    """Load saved data, falling back to an empty store if it cannot be read."""
    try:
        store = load_store(data_path)
    except CorruptDataError as e:
        logger.warning("Could not load saved data: %s", e)
        console.print(f"[yellow]Could not load saved data ({e}). Starting new database.[/yellow]")
        store = HospitalStore()
        try:
            moved_to = set_aside(data_path)
        except StorageError as move_error:
            # Leave the unreadable file alone rather than overwrite it on exit
            console.print(f"[bold red]Error:[/bold red] {move_error}. Autosave disabled.")
            return Session(store=store, data_path=data_path, save_on_exit=False)
        console.print(f"[yellow]Unreadable file kept as {moved_to}.[/yellow]")
    except StorageError as e:
        # The file is there but could not be read; saving on exit would replace it
        logger.warning("Could not load saved data: %s", e)
        console.print(
            f"[yellow]Could not load saved data ({e}). Starting new database; "
            f"autosave disabled.[/yellow]"
        )
        return Session(store=HospitalStore(), data_path=data_path, save_on_exit=False)
    else:
        summary = store.summary()
        console.print(
            f"[cyan]Data loaded. Patients: {summary['patients']}, Diseases: {summary['diseases']}, "
            f"Doctors: {summary['doctors']}, Appointments: {summary['appointments']}[/cyan]"
        )
    return Session(store=store, data_path=data_path)


def close_session(session: Session) -> None:
    """Save on the way out; a failed save is reported, not raised."""
    if not session.save_on_exit:
        return
    try:
        handle_save(session)
    except StorageError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")


def main(data_path: Path | None = None):
    """Main menu loop."""
    configure_logging()
    session = open_session(data_path)

    while True:
        console.print()
        console.print(render_menu())
        try:
            number = ask_int("\nEnter your choice: ")
            choice = get_menu_choice(number)
            if choice is None:
                console.print("[red]Invalid choice. Try again.[/red]")
                continue
            if not process_choice(session, choice):
                break
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        except Exception as e:
            console.print(f"[bold red]Error:[/bold red] {e}\n")

    close_session(session)
    console.print("[magenta]Exiting. Goodbye![/magenta]")


if __name__ == "__main__":
    main()
