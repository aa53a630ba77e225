"""
API families of the Tencent Cloud API SDK

Client
   a central object to maintain state and allow accessing all Activities;
   creates Method Builders which in turn allow access to individual Call Builders

Call Builders
   fluent setters for the parameters of one action; ``build()`` validates them

Calls
   validated requests whose ``doit`` sends them and passes raw response bytes
   to a callback
"""

from .base import (
    ApiCall,
    CallBuilder,
    JSON_MIME,
    MAX_MEDIA_SIZE,
    serialize_payload,
)
from .tmt import (
    TranslateMethods,
    FileTranslateCallBuilder,
    GetFileTranslateCallBuilder,
    ImageTranslateCallBuilder,
    LanguageDetectCallBuilder,
    SpeechTranslateCallBuilder,
    TextTranslateCallBuilder,
    TextTranslateBatchCallBuilder,
)

__all__ = [
    'ApiCall',
    'CallBuilder',
    'JSON_MIME',
    'MAX_MEDIA_SIZE',
    'serialize_payload',
    'TranslateMethods',
    'FileTranslateCallBuilder',
    'GetFileTranslateCallBuilder',
    'ImageTranslateCallBuilder',
    'LanguageDetectCallBuilder',
    'SpeechTranslateCallBuilder',
    'TextTranslateCallBuilder',
    'TextTranslateBatchCallBuilder',
]
