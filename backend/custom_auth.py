from typing import Optional, TypeVar

from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser
from rest_framework import HTTP_HEADER_ENCODING
from rest_framework.request import Request

from rest_framework_simplejwt.authentication import JWTAuthentication as HeaderJWTAuthentication
from rest_framework_simplejwt.models import TokenUser
from rest_framework_simplejwt.tokens import Token

AuthUser = TypeVar("AuthUser", AbstractBaseUser, TokenUser)

ACCESS_TOKEN_COOKIE = getattr(settings, "JWT_ACCESS_COOKIE_NAME", "access_token")


class JWTAuthentication(HeaderJWTAuthentication):
    """
    JWT authentication reading the access token from the ``access_token`` cookie
    set by the frontend. Validation and user lookup come from simplejwt; requests
    without the cookie fall through to the next authentication class
    (Authorization header).
    """

    www_authenticate_realm = "api"
    media_type = "application/json"

    def authenticate(self, request: Request) -> Optional[tuple[AuthUser, Token]]:
        cookie = request.COOKIES.get(ACCESS_TOKEN_COOKIE) or None
        if cookie is None:
            return None

        raw_token = cookie.encode(HTTP_HEADER_ENCODING)
        validated_token = self.get_validated_token(raw_token)

        return self.get_user(validated_token), validated_token
