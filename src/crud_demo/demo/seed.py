"""Fixed records inserted by every demo run."""

from src.crud_demo.entities.core.user import User


def seed_users() -> list[User]:
    return [
        User(name="Rushikesh", age=21, phone=7458965896),
        User(name="Ram", age=22, phone=7458965897),
        User(name="Raju", age=18, phone=7458965898),
    ]


# Target of the update and delete steps
TARGET_NAME = "Raju"
NEW_PHONE = 1234567890
MIN_AGE = 20
