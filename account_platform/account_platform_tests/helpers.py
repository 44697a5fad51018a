def register(client, email, password="Secret123!"):
    response = client.post("/register", json={"email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()["token"]


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}
