from talenthub.models.account import UserAccount
from talenthub.models.admin import AdminRecord
from talenthub.models.talent import Talent
from talenthub.models.employer import Employer
from talenthub.models.swipe import Swipe

__all__ = ["UserAccount", "AdminRecord", "Talent", "Employer", "Swipe"]
