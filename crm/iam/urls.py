from django.urls import path
from crm.iam.api import login, me, users_list, users_detail

urlpatterns = [
    path("auth/login", login, name="auth-login"),
    path("auth/me", me, name="auth-me"),
    path("users", users_list, name="users-list"),
    path("users/<int:user_id>", users_detail, name="users-detail"),
]
