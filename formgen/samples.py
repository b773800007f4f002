"""Sample form configuration used by ``formgen generate --sample``."""

SAMPLE_FORM = {
    "title": "User Registration Form",
    "fields": [
        {
            "name": "firstName",
            "type": "text",
            "label": "First Name",
            "required": True,
            "validation": {"minLength": 2, "maxLength": 50},
        },
        {
            "name": "email",
            "type": "email",
            "label": "Email Address",
            "required": True,
        },
        {
            "name": "age",
            "type": "number",
            "label": "Age",
            "required": True,
            "validation": {"min": 18, "max": 100},
        },
        {
            "name": "bio",
            "type": "textarea",
            "label": "Bio",
            "required": False,
        },
        {
            "name": "newsletter",
            "type": "boolean",
            "label": "Subscribe to newsletter",
            "required": False,
        },
        {
            "name": "role",
            "type": "radio",
            "label": "Role",
            "required": True,
            "options": ["Developer", "Designer", "Manager", "Other"],
        },
        {
            "name": "hobbies",
            "type": "array",
            "label": "Hobbies",
            "itemType": "text",
            "required": False,
        },
        {
            "name": "addresses",
            "type": "array",
            "label": "Addresses",
            "required": False,
            "fields": [
                {"name": "street", "type": "text", "label": "Street", "required": True},
                {"name": "city", "type": "text", "label": "City", "required": True},
                {"name": "zipCode", "type": "text", "label": "ZIP Code", "required": True},
            ],
        },
    ],
}
