import pytest
from django.urls import reverse


# ----------------------
# 🔹 Login (JWT pair)
# ----------------------
@pytest.mark.django_db
def test_login_success(api_client, admin_user):
    url = reverse("auth-token")
    response = api_client.post(url, {"email": admin_user.email, "password": "StrongPass123!"}, format="json")
    assert response.status_code == 200
    assert "access" in response.data and "refresh" in response.data


@pytest.mark.django_db
def test_login_failure(api_client, admin_user):
    url = reverse("auth-token")
    response = api_client.post(url, {"email": admin_user.email, "password": "badpass"}, format="json")
    assert response.status_code == 401


@pytest.mark.django_db
def test_refresh(api_client, staff_user):
    login = api_client.post(
        reverse("auth-token"), {"email": staff_user.email, "password": "StrongPass123!"}, format="json"
    )
    response = api_client.post(reverse("auth-token-refresh"), {"refresh": login.data["refresh"]}, format="json")
    assert response.status_code == 200
    assert "access" in response.data


# ----------------------
# 🔹 Me Endpoint
# ----------------------
@pytest.mark.django_db
def test_me(api_client, admin_user):
    login = api_client.post(
        reverse("auth-token"), {"email": admin_user.email, "password": "StrongPass123!"}, format="json"
    )
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")

    response = api_client.get(reverse("auth-me"))
    assert response.status_code == 200
    assert response.data["email"] == admin_user.email
    assert response.data["role"] == "admin"
    assert response.data["is_gym_admin"] is True


@pytest.mark.django_db
def test_me_requires_login(api_client):
    response = api_client.get(reverse("auth-me"))
    assert response.status_code == 401


@pytest.mark.django_db
def test_staff_user_is_not_admin(staff_user):
    assert staff_user.role == "user"
    assert not staff_user.is_gym_admin
