from django.contrib.auth import get_user_model
from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.serializers import (
    LoginSerializer,
    LogoutSerializer,
    RoleChangeSerializer,
    SellerSerializer,
    UserRegistrationSerializer,
    UserSerializer,
)
from authentication.api.serializers.response_serializers import (
    ErrorResponseSerializer,
    MessageResponseSerializer,
    RoleChangeResponseSerializer,
    RoleDeniedResponseSerializer,
    TokenPairResponseSerializer,
)
from authentication.permissions import AdminRequired
from infrastructure.container import container


User = get_user_model()


class LoginAPIView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="auth_login",
        summary="Login with email and password",
        description="""
        Authenticate user with email and password.

        Returns a JWT pair whose claims carry the user's role, plus the user info.
        Unknown emails and wrong passwords produce the same error.
        """,
        request=LoginSerializer,
        responses={
            200: OpenApiResponse(
                response=TokenPairResponseSerializer,
                description="Login successful",
                examples=[
                    OpenApiExample(
                        "Successful Login",
                        value={
                            "message": "Login successful",
                            "access": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                            "refresh": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                            "user": {
                                "id": "123e4567-e89b-12d3-a456-426614174000",
                                "email": "seller@example.com",
                                "name": "Demo Seller",
                                "role": "seller",
                                "dashboard": "/seller-dashboard",
                            },
                        },
                    )
                ],
            ),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Malformed credentials"),
            401: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid credentials"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"error": "A valid email and password are required.", "details": serializer.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )

        service = container.auth_service()
        result = service.login(**serializer.validated_data)

        if not result.success:
            return Response({"error": result.error}, status=status.HTTP_401_UNAUTHORIZED)

        return Response(
            {
                "message": result.message,
                "access": result.access_token,
                "refresh": result.refresh_token,
                "user": UserSerializer(result.user).data,
            },
            status=status.HTTP_200_OK,
        )


class RegisterAPIView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="auth_register",
        summary="Register a new account",
        description="Creates a client account and logs it in straight away.",
        request=UserRegistrationSerializer,
        responses={
            201: OpenApiResponse(response=TokenPairResponseSerializer, description="Registration successful"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": "Invalid registration data.", "details": serializer.errors}, status=400)

        service = container.auth_service()
        result = service.register(**serializer.validated_data)

        if not result.success:
            return Response({"error": result.error, "details": result.errors}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            {
                "message": result.message,
                "access": result.access_token,
                "refresh": result.refresh_token,
                "user": UserSerializer(result.user).data,
            },
            status=status.HTTP_201_CREATED,
        )


class LogoutAPIView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="auth_logout",
        summary="Logout",
        description="Blacklists the refresh token. Always succeeds, even for an expired token.",
        request=LogoutSerializer,
        responses={200: MessageResponseSerializer},
        tags=["Authentication"],
    )
    def post(self, request):
        result = container.auth_service().logout(request.data.get("refresh"))
        return Response({"message": result.message}, status=status.HTTP_200_OK)


class MeView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="auth_me",
        summary="Current user",
        responses={200: UserSerializer},
        tags=["Authentication"],
    )
    def get(self, request):
        return Response(container.auth_service().get_user_info(request.user))


class RefreshRoleView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="auth_refresh_role",
        summary="Re-read the current user's role",
        description="Looks the role up in the database again. Use after an admin changed your roles.",
        request=None,
        responses={200: UserSerializer},
        tags=["Authentication"],
    )
    def post(self, request):
        return Response(container.auth_service().refresh_user_role(request.user))


class RoleManagementView(APIView):
    permission_classes = [AdminRequired]

    @extend_schema(
        operation_id="auth_change_role",
        summary="Grant or revoke a role (admin)",
        request=RoleChangeSerializer,
        responses={
            200: RoleChangeResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid role change"),
            403: OpenApiResponse(response=RoleDeniedResponseSerializer, description="Not an admin"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="User not found"),
        },
        tags=["Roles"],
    )
    def post(self, request):
        serializer = RoleChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            target = User.objects.get(pk=data["user_id"])
        except User.DoesNotExist:
            return Response({"error": "User not found."}, status=status.HTTP_404_NOT_FOUND)

        service = container.seller_service()
        if data["action"] == "grant":
            result = service.grant_role(target, data["role"])
        else:
            result = service.revoke_role(target, data["role"])

        if not result.success:
            return Response({"error": result.error}, status=status.HTTP_400_BAD_REQUEST)

        return Response({"message": result.message, **result.data}, status=status.HTTP_200_OK)


class SellerDetailView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="auth_seller_detail",
        summary="Seller directory entry",
        responses={
            200: SellerSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Seller not found"),
        },
        tags=["Sellers"],
    )
    def get(self, request, pk):
        seller = container.seller_service().fetch_seller_by_id(pk)
        if seller is None:
            return Response({"error": "Seller not found."}, status=status.HTTP_404_NOT_FOUND)
        return Response(SellerSerializer(seller).data)
