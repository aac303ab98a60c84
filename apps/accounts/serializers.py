from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Basic admin serializer for profile display."""
    
    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for admin registration."""
    
    username = serializers.CharField(max_length=255, required=True)
    password = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=False,
        style={'input_type': 'password'}
    )
    
    def validate(self, attrs):
        """Validate password confirmation and strength."""
        confirm = attrs.pop('password_confirm', None)
        if confirm is not None and attrs['password'] != confirm:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })

        try:
            validate_password(attrs['password'], user=User(username=attrs['username']))
        except DjangoValidationError as e:
            raise serializers.ValidationError({'password': list(e.messages)})

        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for admin login."""
    
    username = serializers.CharField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )
