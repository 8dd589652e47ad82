from gtonline.models.user import User
from gtonline.models.profile import RegularUser, Interest, Attend, Employment
from gtonline.models.catalog import School, Employer
from gtonline.models.friendship import Friendship

__all__ = ["User", "RegularUser", "Interest", "Attend", "Employment", "School", "Employer", "Friendship"]
