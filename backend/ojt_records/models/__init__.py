from ojt_records.models.account import Account, ROLE_ADMIN, ROLE_STUDENT
from ojt_records.models.student import StudentProfile

# This allows importing all models from ojt_records.models
