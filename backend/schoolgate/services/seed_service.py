# File: backend/schoolgate/services/seed_service.py
"""Database seeding service for sample data."""
import click
from schoolgate import db
from schoolgate.models.user import User, UserRole
from schoolgate.models.school_class import SchoolClass
from schoolgate.models.student import Student
from schoolgate.services.student_service import StudentService

class SeedService:
    """Service to seed database with sample data."""
    
    @staticmethod
    def seed_all():
        """Seed all sample data."""
        SeedService.seed_staff()
        SeedService.seed_classes()
        SeedService.seed_students()
    
    @staticmethod
    def seed_staff():
        """Seed the office account and two teachers."""
        staff = [
            ('Secretaria', 'secretaria@escola.com', 'admin123', UserRole.ADMIN),
            ('Ana Souza', 'ana@escola.com', 'prof123', UserRole.TEACHER),
            ('Beatriz Lima', 'beatriz@escola.com', 'prof123', UserRole.TEACHER)
        ]
        
        for name, email, password, role in staff:
            if not User.query.filter_by(email=email).first():
                user = User(email=email, name=name, role=role)
                user.set_password(password)
                db.session.add(user)
        
        db.session.commit()
        click.echo(f"✅ {User.query.count()} staff accounts")
    
    @staticmethod
    def seed_classes():
        """One class per teacher."""
        teachers = User.query.filter_by(role=UserRole.TEACHER).order_by(User.id).all()
        for index, teacher in enumerate(teachers, start=1):
            name = f"Infantil {index}"
            if not SchoolClass.query.filter_by(name=name).first():
                db.session.add(SchoolClass(name=name, teacher_id=teacher.id))
        
        db.session.commit()
        click.echo(f"✅ {SchoolClass.query.count()} classes")
    
    @staticmethod
    def seed_students():
        """Enroll sample students with their guardians."""
        classes = SchoolClass.query.order_by(SchoolClass.id).all()
        families = [
            ('Lucas Pereira', 'Marcos Pereira', '11999990001'),
            ('Julia Santos', 'Carla Santos', '11999990002'),
            ('Pedro Alves', 'Rita Alves', '11999990003'),
            ('Marina Costa', 'João Costa', '11999990004')
        ]
        
        for index, (student_name, guardian_name, phone) in enumerate(families):
            if Student.query.filter_by(name=student_name).first():
                continue
            class_id = classes[index % len(classes)].id if classes else None
            result, error = StudentService.enroll(
                student_name=student_name,
                guardian_name=guardian_name,
                guardian_phone=phone,
                class_id=class_id
            )
            if error:
                click.echo(f"❌ {student_name}: {error}")
            else:
                click.echo(f"👧 {student_name}: {result['qr_aluno']} / {result['qr_pai']}")
