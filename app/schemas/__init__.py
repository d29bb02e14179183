# Schemas package (re-export feature modules for stable imports)
from .appointments.appointment import *
from .customers.customer import *
from .common.common import *
