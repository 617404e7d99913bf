from django.urls import path

from .views import StudyboardLoginView, StudyboardLogoutView, register

app_name = "accounts"

urlpatterns = [
    path("login/", StudyboardLoginView.as_view(), name="login"),
    path("logout/", StudyboardLogoutView.as_view(), name="logout"),
    path("register/", register, name="register"),
]
