from jose import jwt

# Admin tokens are issued by the auth service; this app only verifies them.
JWT_ALGORITHM = "HS256"


def decode_jwt(token: str, secret: str) -> dict:
    return jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
