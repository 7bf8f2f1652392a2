from typing import Dict, Any

user_registration_request_schema_example: Dict[str, Any] = {
    "name": "Neo",
    "email": "neo@matrix.com",
    "password": "Matrix1999!"
}

user_login_request_schema_example: Dict[str, Any] = {
    "email": "neo@matrix.com",
    "password": "Matrix1999!"
}

user_registration_response_schema_example: Dict[str, Any] = {
    "status": 201,
    "message": "Welcome, Neo! Your account has been created."
}

user_login_response_schema_example: Dict[str, Any] = {
    "status": 200,
    "message": "Welcome back, Neo!"
}

message_response_schema_example: Dict[str, Any] = {
    "status": 200,
    "message": "See you later Neo 👋"
}
