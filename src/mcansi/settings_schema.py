from mcansi.settings import SchemaDict

SCHEMA: list[SchemaDict] = [
    {
        "key": "transcode",
        "title": "Transcoding",
        "type": "object",
        "fields": [
            {
                "key": "legacy",
                "title": "Legacy colors",
                "help": "Collapse RGB colors to the 16 palette colors.",
                "type": "boolean",
                "default": False,
            },
            {
                "key": "max_retries",
                "title": "Maximum retries",
                "help": "Additional passes after markup fails to parse.",
                "type": "integer",
                "default": 1,
            },
        ],
    },
    {
        "key": "console",
        "title": "Console",
        "type": "object",
        "fields": [
            {
                "key": "enable_windows_ansi",
                "title": "Enable ANSI on Windows",
                "help": "Turn on virtual terminal processing at startup.",
                "type": "boolean",
                "default": True,
            },
        ],
    },
]
