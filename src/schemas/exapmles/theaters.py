from typing import Dict, Any

location_schema_example: Dict[str, Any] = {
    "address": {
        "street1": "340 W Market",
        "city": "Bloomington",
        "state": "MN",
        "zipcode": "55425"
    },
    "geo": {
        "type": "Point",
        "coordinates": [-93.24565, 44.85466]
    }
}

theater_schema_example: Dict[str, Any] = {
    "_id": "59a47286cfa9a3a73e51e72c",
    "theaterId": 1000,
    "location": location_schema_example
}

theater_request_schema_example: Dict[str, Any] = {
    "location": location_schema_example
}

theater_response_schema_example: Dict[str, Any] = {
    "status": 201,
    "message": "Theater created",
    "data": theater_schema_example
}

theater_list_response_schema_example: Dict[str, Any] = {
    "status": 200,
    "data": [theater_schema_example]
}
