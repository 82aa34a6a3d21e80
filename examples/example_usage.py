"""Example: drive the service layer without Flask, using the in-memory store."""

from datetime import datetime, timedelta

from face_attendance.common.validators import parse_descriptor
from face_attendance.container import build_memory_container
from face_attendance.core.enums import Pose
from face_attendance.identities.memory_identity_repository import InMemoryIdentityRepository
from face_attendance.identities.model import EnrolledDescriptor


def main():
    identities = InMemoryIdentityRepository()
    identities.enroll("u1", EnrolledDescriptor(Pose.FRONT, [0.0] * 128), full_name="Demo")
    container = build_memory_container(identities_repo=identities)

    live = parse_descriptor([0.01] * 128)
    start = datetime.now().replace(hour=9, minute=0, second=0, microsecond=0)
    container.attendance_service.check_in("u1", live, now=start)
    container.attendance_service.check_out("u1", live, now=start + timedelta(hours=8, minutes=30))

    for s in container.attendance_service.get_sessions("u1"):
        print(s.to_dict())


if __name__ == "__main__":
    main()
