def login(client, role, email, password):
    return client.post(
        "/api/v1/auth/login",
        json={"role": role, "email": email, "password": password},
    )


def auth_headers(client, role, email, password):
    response = login(client, role, email, password)
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}
