from typing import Dict, Any

movie_schema_example: Dict[str, Any] = {
    "_id": "573a1398f29313caabceb500",
    "title": "The Matrix",
    "year": 1999,
    "plot": "A computer hacker learns from mysterious rebels about the true "
            "nature of his reality and his role in the war against its controllers.",
    "genres": ["Action", "Sci-Fi"],
    "runtime": 136,
    "cast": ["Keanu Reeves", "Laurence Fishburne", "Carrie-Anne Moss"],
    "languages": ["English"],
    "released": "1999-03-31T00:00:00Z",
    "directors": ["Lana Wachowski", "Lilly Wachowski"],
    "rated": "R",
    "awards": {"wins": 34, "nominations": 48, "text": "Won 4 Oscars."},
    "imdb": {"rating": 8.7, "votes": 1080566, "id": 133093},
    "countries": ["USA"],
    "type": "movie",
    "num_mflix_comments": 0,
    "lastupdated": "2024-01-15T10:30:00Z"
}

movie_create_request_schema_example: Dict[str, Any] = {
    "title": "The Matrix",
    "year": 1999,
    "genres": ["Action", "Sci-Fi"],
    "runtime": 136,
    "directors": ["Lana Wachowski", "Lilly Wachowski"]
}

movie_update_request_schema_example: Dict[str, Any] = {
    "plot": "Neo discovers the truth about the Matrix.",
    "rated": "R"
}

movie_response_schema_example: Dict[str, Any] = {
    "status": 200,
    "data": movie_schema_example
}

movie_list_response_schema_example: Dict[str, Any] = {
    "status": 200,
    "data": [movie_schema_example]
}

comment_schema_example: Dict[str, Any] = {
    "_id": "5a9427648b0beebeb69579e7",
    "name": "Mercedes Tyler",
    "email": "mercedes_tyler@fakegmail.com",
    "text": "Eius veritatis vero facilis quaerat fuga temporibus.",
    "movie_id": "573a1398f29313caabceb500",
    "date": "2024-01-15T10:30:00Z"
}

comment_create_request_schema_example: Dict[str, Any] = {
    "name": "Mercedes Tyler",
    "email": "mercedes_tyler@fakegmail.com",
    "text": "Eius veritatis vero facilis quaerat fuga temporibus."
}

comment_response_schema_example: Dict[str, Any] = {
    "status": 201,
    "message": "Comment added",
    "data": comment_schema_example
}

comment_list_response_schema_example: Dict[str, Any] = {
    "status": 200,
    "data": [comment_schema_example]
}
