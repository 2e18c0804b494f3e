from inventory.models.user import User


class UserRepo:
    def __init__(self, session):
        self.session = session

    def get(self, user_id: int):
        return self.session.get(User, user_id)

    def get_by_username(self, username: str):
        return self.session.query(User).filter_by(username=username).first()

    def create(self, user: User):
        self.session.add(user)
        self.session.commit()
        return user

    def rollback(self):
        self.session.rollback()
