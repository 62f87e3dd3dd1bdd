"""Example: use the service layer directly (no Flask).

Controllers are thin; the business rules live in the services.
"""

import importlib

from porter_payroll.config import get_settings_module
from porter_payroll.container import build_container
from porter_payroll.payroll.model import monthly_payroll_to_dict


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings)
    try:
        print(monthly_payroll_to_dict(container.payroll_service.monthly(2025, 6)))
    finally:
        container.close()


if __name__ == "__main__":
    main()
