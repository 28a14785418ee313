from sweetshop.models.user import User, UserRole
from sweetshop.models.sweet import Sweet, SweetCategory
