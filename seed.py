from datetime import date, time
from database import SessionLocal, engine, Base
from models.masters import ClassMaster
from models.students import Student
from models.exams import Subject, ExamType, ExamSchedule
from models.results import StudentMark
from routers.results import calculate_grade

# Creates tables if missing
Base.metadata.create_all(bind=engine)

db = SessionLocal()

def seed_data():
    print("🌱 Seeding Exam Report Data...")

    # 1. CLASS
    cls = db.query(ClassMaster).filter_by(class_name="Class 10").first()
    if not cls:
        cls = ClassMaster(class_name="Class 10")
        db.add(cls)
        db.commit()
        db.refresh(cls)
        print("✅ Added: Class 10")

    # 2. SUBJECTS
    subject_ids = {}
    for name, code in [("Maths", "MAT"), ("English", "ENG"), ("Science", "SCI"), ("Hindi", "HIN")]:
        sub = db.query(Subject).filter_by(subject_name=name).first()
        if not sub:
            sub = Subject(subject_name=name, subject_code=code)
            db.add(sub)
            db.commit()
            db.refresh(sub)
            print(f"📘 Added Subject: {name}")
        subject_ids[name] = sub.id

    # 3. STUDENTS
    roster = [
        ("ADM-001", "Ashish", "Kumar", 1),
        ("ADM-002", "Rahul", "Verma", 2),
        ("ADM-003", "Priya", "Sharma", 3),
        ("ADM-004", "Neha", "Singh", None),
    ]
    students = []
    for adm, first, last, roll in roster:
        std = db.query(Student).filter_by(admission_no=adm).first()
        if not std:
            std = Student(admission_no=adm, first_name=first, last_name=last, class_id=cls.id, roll_no=roll)
            db.add(std)
            db.commit()
            db.refresh(std)
            print(f"🎒 Added Student: {first} {last}")
        students.append(std)

    # 4. EXAM + DATE SHEET
    exam = db.query(ExamType).filter_by(exam_name="Half Yearly", class_id=cls.id).first()
    if not exam:
        exam = ExamType(exam_name="Half Yearly", academic_year="2025-2026", class_id=cls.id)
        db.add(exam)
        db.commit()
        db.refresh(exam)

        date_sheet = [("Maths", date(2025, 9, 15)), ("English", date(2025, 9, 16)),
                      ("Science", date(2025, 9, 17)), ("Hindi", date(2025, 9, 18))]
        for name, day in date_sheet:
            db.add(ExamSchedule(exam_id=exam.id, subject_id=subject_ids[name], exam_date=day,
                                start_time=time(9, 0), end_time=time(12, 0), max_marks=100, pass_marks=33))
        db.commit()
        print(f"🗓️  Date sheet created for {exam.exam_name}")

    # 5. MARKS (Neha is left without marks on purpose)
    marks = {
        "ADM-001": {"Maths": 88, "English": 76, "Science": 91, "Hindi": 69},
        "ADM-002": {"Maths": 25, "English": 58, "Science": 44, "Hindi": 61},
        "ADM-003": {"Maths": 95, "English": 89, "Science": 30, "Hindi": 20},
    }
    for std in students:
        for sub_name, obtained in marks.get(std.admission_no, {}).items():
            exists = db.query(StudentMark).filter_by(
                exam_id=exam.id, student_id=std.id, subject_id=subject_ids[sub_name]
            ).first()
            if not exists:
                db.add(StudentMark(exam_id=exam.id, student_id=std.id, subject_id=subject_ids[sub_name],
                                   marks_obtained=obtained, max_marks=100, grade=calculate_grade(obtained)))
    db.commit()

    print(f"\n🎉 All Data Seeded! Broadsheet: /api/v1/reports/exams/{exam.id}/broadsheet")
    db.close()

if __name__ == "__main__":
    seed_data()
