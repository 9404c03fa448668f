"""Badge resolution."""
import pytest
from schoolgate.models import Student, Guardian
from schoolgate.services.badge_service import BadgeService, BadgeKind
from schoolgate.utils.errors import ValidationError, DataIntegrityError

def test_student_badge_resolves_to_student(school):
    resolution = BadgeService.resolve('ALUNO-123')
    
    assert resolution.kind is BadgeKind.STUDENT
    assert resolution.student.name == 'A'
    assert resolution.school_class.id == 5
    assert resolution.guardian is None

def test_guardian_badge_resolves_child_and_class(school):
    resolution = BadgeService.resolve('PAI-456')
    
    assert resolution.kind is BadgeKind.GUARDIAN
    assert resolution.guardian.name == 'Guardian of B'
    assert resolution.student.name == 'B'
    assert resolution.school_class.id == 7

def test_code_is_stripped(school):
    assert BadgeService.resolve('  ALUNO-123 \n').kind is BadgeKind.STUDENT

def test_unknown_code_is_not_found(school):
    resolution = BadgeService.resolve('XYZ')
    
    assert resolution.kind is BadgeKind.NOT_FOUND
    assert resolution.student is None

@pytest.mark.parametrize('code', [None, '', '   ', 123])
def test_missing_code_is_a_validation_error(app, code):
    with pytest.raises(ValidationError):
        BadgeService.resolve(code)

def test_student_namespace_wins_over_guardian(school):
    Guardian(name='Clash', badge_code='ALUNO-123', student_id=school['student_b'].id).save()
    
    resolution = BadgeService.resolve('ALUNO-123')
    
    assert resolution.kind is BadgeKind.STUDENT
    assert resolution.student.name == 'A'

def test_guardian_with_missing_student_is_an_integrity_error(school):
    Guardian(name='Orphan', badge_code='PAI-999', student_id=9999).save()
    
    with pytest.raises(DataIntegrityError):
        BadgeService.resolve('PAI-999')

def test_student_without_class_resolves(app):
    Student(name='C', badge_code='ALUNO-1').save()
    
    resolution = BadgeService.resolve('ALUNO-1')
    
    assert resolution.kind is BadgeKind.STUDENT
    assert resolution.school_class is None

def test_code_in_use_checks_both_namespaces(school):
    assert BadgeService.code_in_use('ALUNO-123')
    assert BadgeService.code_in_use('PAI-456')
    assert not BadgeService.code_in_use('PAI-000')
