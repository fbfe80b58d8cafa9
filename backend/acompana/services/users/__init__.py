from acompana.services.users.accounts import authenticate_user, register_user
from acompana.services.users.history import save_history_summary

__all__ = ["authenticate_user", "register_user", "save_history_summary"]
