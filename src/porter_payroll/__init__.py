"""Porter payroll package.

Feature modules (porters, commute_costs, attendance, payroll, ...) follow the
same layering: a thin Flask controller, a service holding the use cases and a
repository interface with a MySQL implementation.
"""

__version__ = "1.0.0"
