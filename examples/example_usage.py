"""Example: drive the service layer directly (no Flask).

Controllers stay thin; every rule lives in the services used below.
"""

from src.volunteer_hub.volunteer_hub.container import build_container
from src.volunteer_hub.volunteer_hub.core.enums import RegistrationStatus
from src.volunteer_hub.volunteer_hub.database.memory_store import InMemoryEntityStore
from src.volunteer_hub.volunteer_hub.users.model import SignupProfile


def main():
    c = build_container(store=InMemoryEntityStore())

    volunteer = c.user_service.signup(SignupProfile(name="Asha", roll_no="21CS101", password="secret"))
    c.user_service.approve_user(volunteer.user_id)

    event = c.event_service.create_event("Beach clean-up", "2026-11-02", "Bring gloves")
    c.event_service.register_for_event(event.event_id, volunteer.user_id)
    c.event_service.confirm_registration(event.event_id, volunteer.user_id)
    c.attendance_ledger.post_attendance(event.event_id, {volunteer.user_id: "present"})

    print(c.event_service.registrants(event.event_id, RegistrationStatus.CONFIRMED))
    print(c.attendance_ledger.volunteer_history(volunteer.user_id))


if __name__ == "__main__":
    main()
