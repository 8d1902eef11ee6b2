"""
Демонстрационные данные реестра.
"""

from datetime import date
from typing import List

from .generator import build_qr_code_url
from .models import Certificate, University

DEMO_UNIVERSITIES = [
    ("mit", "Massachusetts Institute of Technology", "USA"),
    ("stanford", "Stanford University", "USA"),
    ("oxford", "University of Oxford", "United Kingdom"),
    ("ksu", "King Saud University", "Saudi Arabia"),
    ("cairo", "Cairo University", "Egypt"),
]

# (id, студент, университет, степень, специальность, дата выпуска, дата выдачи)
DEMO_CERTIFICATES = [
    ("CO-MIT-2023-482", "John Smith", "mit", "Bachelor of Science", "Computer Science",
     date(2023, 6, 2), date(2023, 6, 20)),
    ("EL-STANFORD-2023-731", "Emily Johnson", "stanford", "Master of Science", "Electrical Engineering",
     date(2023, 6, 18), date(2023, 7, 1)),
    ("PH-OXFORD-2022-215", "Oliver Brown", "oxford", "Doctor of Philosophy", "Philosophy",
     date(2022, 7, 15), date(2022, 8, 3)),
    ("BU-KSU-2024-356", "Fatimah Al-Qahtani", "ksu", "Bachelor of Business Administration", "Business Administration",
     date(2024, 5, 30), date(2024, 6, 12)),
    ("ME-CAIRO-2023-904", "Ahmed Hassan", "cairo", "Bachelor of Medicine", "Medicine",
     date(2023, 9, 1), date(2023, 9, 21)),
]


def demo_universities() -> List[University]:
    return [University(id=uid, name=name, country=country) for uid, name, country in DEMO_UNIVERSITIES]


def demo_certificates(qr_code_base_url: str, qr_code_size: str = "150x150") -> List[Certificate]:
    return [
        Certificate(
            id=cid,
            student_name=student,
            university_id=university_id,
            degree=degree,
            major=major,
            graduation_date=graduated,
            issue_date=issued,
            qr_code_url=build_qr_code_url(cid, qr_code_base_url, qr_code_size)
        )
        for cid, student, university_id, degree, major, graduated, issued in DEMO_CERTIFICATES
    ]
