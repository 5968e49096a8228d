"""
Record Service - CRUD for students, companies, drives, notices and events.

Where each record lives:
1. users / students / companies / drives -> PostgreSQL (raw SQL)
2. notices / events                      -> MongoDB

Email addresses live only in `users`; student and company queries join it.
"""

from datetime import datetime
from typing import Optional, List

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection
from sqlalchemy import text

from app.db.mongodb import get_collection, COLLECTIONS
from app.db.postgres import get_db_session, execute_raw_sql, fetch_one
from app.services.eligibility import filter_eligible


STUDENT_COLUMNS = """
    s.student_id, s.user_id, s.name, u.email, s.roll_no, s.course, s.branch,
    s.year, s.cgpa, s.backlogs, s.skills, s.certifications, s.resume_file_name,
    s.resume_uploaded_at, s.is_verified, s.is_blacklisted, s.updated_at
"""

COMPANY_COLUMNS = """
    c.company_id, c.user_id, c.company_name, c.hr_name, u.email AS hr_email,
    c.website, c.description, c.is_approved, c.created_at
"""

DRIVE_COLUMNS = """
    d.drive_id, d.company_id, c.company_name, d.role, d.description, d.ctc,
    d.deadline, d.eligible_branches, d.eligible_years, d.min_cgpa,
    d.max_backlogs, d.status, d.created_at
"""

STUDENT_UPDATABLE = (
    "name", "roll_no", "course", "branch", "year", "cgpa", "backlogs",
    "skills", "certifications", "resume_file_name",
)


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: dict) -> dict:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


def serialize_docs(docs) -> list:
    return [serialize_doc(doc) for doc in docs]


def _create_user(db, email: str, password_hash: str, role: str) -> int:
    return db.execute(
        text("""
            INSERT INTO users (email, password_hash, role)
            VALUES (:email, :password_hash, :role)
            RETURNING user_id
        """),
        {"email": email, "password_hash": password_hash, "role": role}
    ).scalar_one()


def email_exists(email: str) -> bool:
    return fetch_one("SELECT user_id FROM users WHERE email = :email", {"email": email}) is not None


def roll_no_exists(roll_no: str) -> bool:
    return fetch_one("SELECT student_id FROM students WHERE roll_no = :roll_no", {"roll_no": roll_no}) is not None


# ============================================================
# STUDENTS
# ============================================================

class StudentRecordService:
    """
    Student profiles. Eligibility filtering happens in Python
    (app.services.eligibility) over the non-blacklisted students.
    """

    def create_with_account(self, data, password_hash: str) -> dict:
        """
        Create the login account and the student profile in one transaction.

        Args:
            data: StudentRegisterRequest
            password_hash: bcrypt hash of the chosen password
        """
        with get_db_session() as db:
            user_id = _create_user(db, data.email, password_hash, "student")
            student_id = db.execute(
                text("""
                    INSERT INTO students (user_id, name, roll_no, course, branch, year, cgpa,
                                          backlogs, skills, certifications, resume_file_name,
                                          resume_uploaded_at)
                    VALUES (:user_id, :name, :roll_no, :course, :branch, :year, :cgpa,
                            :backlogs, :skills, :certifications, :resume_file_name,
                            :resume_uploaded_at)
                    RETURNING student_id
                """),
                {
                    "user_id": user_id,
                    "name": data.name,
                    "roll_no": data.roll_no,
                    "course": data.course,
                    "branch": data.branch,
                    "year": data.year,
                    "cgpa": data.cgpa,
                    "backlogs": data.backlogs,
                    "skills": data.skills,
                    "certifications": data.certifications,
                    "resume_file_name": data.resume_file_name,
                    "resume_uploaded_at": datetime.utcnow() if data.resume_file_name else None,
                }
            ).scalar_one()
        return {"user_id": user_id, "student_id": student_id}

    def get_by_user(self, user_id: int) -> Optional[dict]:
        return fetch_one(
            f"SELECT {STUDENT_COLUMNS} FROM students s JOIN users u ON s.user_id = u.user_id "
            "WHERE s.user_id = :id",
            {"id": user_id}
        )

    def update(self, student_id: int, updates: dict) -> bool:
        """Apply a partial update. Unknown keys are ignored."""
        fields = {k: v for k, v in updates.items() if k in STUDENT_UPDATABLE and v is not None}
        if not fields:
            return False

        assignments = [f"{k} = :{k}" for k in fields]
        if "resume_file_name" in fields:
            assignments.append("resume_uploaded_at = CURRENT_TIMESTAMP")

        params = dict(fields, id=student_id)
        with get_db_session() as db:
            result = db.execute(
                text(f"UPDATE students SET {', '.join(assignments)}, updated_at = CURRENT_TIMESTAMP "
                     "WHERE student_id = :id"),
                params
            )
        return result.rowcount > 0

    def list_all(self) -> List[dict]:
        return execute_raw_sql(
            f"SELECT {STUDENT_COLUMNS} FROM students s JOIN users u ON s.user_id = u.user_id "
            "ORDER BY s.roll_no"
        )

    def list_student_emails(self) -> List[str]:
        return [s["email"] for s in self.list_all()]

    def get_eligible_students_for_drive(self, drive: dict) -> List[dict]:
        candidates = execute_raw_sql(
            f"SELECT {STUDENT_COLUMNS} FROM students s JOIN users u ON s.user_id = u.user_id "
            "WHERE s.is_blacklisted = FALSE AND u.is_active = TRUE"
        )
        return filter_eligible(candidates, drive)


# ============================================================
# COMPANIES
# ============================================================

class CompanyRecordService:

    def create_with_account(self, data, password_hash: str) -> dict:
        with get_db_session() as db:
            user_id = _create_user(db, data.hr_email, password_hash, "company")
            company_id = db.execute(
                text("""
                    INSERT INTO companies (user_id, company_name, hr_name, website, description)
                    VALUES (:user_id, :company_name, :hr_name, :website, :description)
                    RETURNING company_id
                """),
                {
                    "user_id": user_id,
                    "company_name": data.company_name,
                    "hr_name": data.hr_name,
                    "website": data.website,
                    "description": data.description,
                }
            ).scalar_one()
        return {"user_id": user_id, "company_id": company_id}

    def get(self, company_id: int) -> Optional[dict]:
        return fetch_one(
            f"SELECT {COMPANY_COLUMNS} FROM companies c JOIN users u ON c.user_id = u.user_id "
            "WHERE c.company_id = :id",
            {"id": company_id}
        )

    def get_by_user(self, user_id: int) -> Optional[dict]:
        return fetch_one(
            f"SELECT {COMPANY_COLUMNS} FROM companies c JOIN users u ON c.user_id = u.user_id "
            "WHERE c.user_id = :id",
            {"id": user_id}
        )

    def approve(self, company_id: int) -> bool:
        with get_db_session() as db:
            result = db.execute(
                text("UPDATE companies SET is_approved = TRUE WHERE company_id = :id AND is_approved = FALSE"),
                {"id": company_id}
            )
        return result.rowcount > 0


# ============================================================
# DRIVES
# ============================================================

class DriveRecordService:

    def create(self, company_id: int, data) -> int:
        with get_db_session() as db:
            return db.execute(
                text("""
                    INSERT INTO drives (company_id, role, description, ctc, deadline,
                                        eligible_branches, eligible_years, min_cgpa, max_backlogs)
                    VALUES (:company_id, :role, :description, :ctc, :deadline,
                            :eligible_branches, :eligible_years, :min_cgpa, :max_backlogs)
                    RETURNING drive_id
                """),
                {
                    "company_id": company_id,
                    "role": data.role,
                    "description": data.description,
                    "ctc": data.ctc,
                    "deadline": data.deadline,
                    "eligible_branches": data.eligible_branches,
                    "eligible_years": data.eligible_years,
                    "min_cgpa": data.min_cgpa,
                    "max_backlogs": data.max_backlogs,
                }
            ).scalar_one()

    def get(self, drive_id: int) -> Optional[dict]:
        return fetch_one(
            f"SELECT {DRIVE_COLUMNS} FROM drives d JOIN companies c ON d.company_id = c.company_id "
            "WHERE d.drive_id = :id",
            {"id": drive_id}
        )

    def list_by_company(self, company_id: int) -> List[dict]:
        return execute_raw_sql(
            f"SELECT {DRIVE_COLUMNS} FROM drives d JOIN companies c ON d.company_id = c.company_id "
            "WHERE d.company_id = :cid ORDER BY d.created_at DESC",
            {"cid": company_id}
        )

    def list_open(self) -> List[dict]:
        return execute_raw_sql(
            f"SELECT {DRIVE_COLUMNS} FROM drives d JOIN companies c ON d.company_id = c.company_id "
            "WHERE d.status = 'open' AND d.deadline >= CURRENT_DATE ORDER BY d.deadline"
        )


# ============================================================
# NOTICES (MongoDB)
# ============================================================

class NoticeService:

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["notices"])

    def insert(self, title: str, content: str) -> str:
        doc = {
            "title": title,
            "content": content,
            "is_active": True,
            "created_at": datetime.utcnow()
        }
        return str(self.collection.insert_one(doc).inserted_id)

    def get_active(self, limit: int = 20) -> List[dict]:
        """Active notices, most recent first."""
        cursor = self.collection.find({"is_active": True}).sort("created_at", DESCENDING).limit(limit)
        return serialize_docs(cursor)

    def deactivate(self, notice_id: str) -> bool:
        try:
            oid = ObjectId(notice_id)
        except InvalidId:
            return False
        result = self.collection.update_one({"_id": oid}, {"$set": {"is_active": False}})
        return result.modified_count > 0


# ============================================================
# EVENTS (MongoDB)
# ============================================================

class EventService:

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["events"])

    def insert(self, title: str, event_date: datetime, description: str = None, venue: str = None) -> str:
        doc = {
            "title": title,
            "description": description,
            "event_date": event_date,
            "venue": venue,
            "is_active": True,
            "created_at": datetime.utcnow()
        }
        return str(self.collection.insert_one(doc).inserted_id)

    def get_active(self, limit: int = 20) -> List[dict]:
        """Active events that haven't happened yet, soonest first."""
        cursor = self.collection.find(
            {"is_active": True, "event_date": {"$gte": datetime.utcnow()}}
        ).sort("event_date", ASCENDING).limit(limit)
        return serialize_docs(cursor)
