"""
Tencent Machine Translation (tmt) API

Call builders for the tmt actions of API version 2018-03-21. Every builder
is created from ``TranslateMethods``:

    call = (client.translate()
            .text_translate()
            .source("it")
            .target("zh")
            .project_id(0)
            .region("ap-guangzhou")
            .source_text("Credere è destino")
            .build())
    text = call.doit(lambda body: json.loads(body)["Response"]["TargetText"])
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union, TYPE_CHECKING

from .base import CallBuilder, check_uint, read_media
from ..exceptions import InvalidInputError

if TYPE_CHECKING:
    from ..client import TencentClient


class TranslateMethods:
    """Method builders for the tmt service."""

    def __init__(self, client: 'TencentClient'):
        self.client = client

    def file_translate(self) -> 'FileTranslateCallBuilder':
        """
        Create builder to help you perform the following task:
        translate a file (resource)
        """
        return FileTranslateCallBuilder(self.client)

    def get_file_translate_data(self) -> 'GetFileTranslateCallBuilder':
        """
        Create builder to help you perform the following task:
        fetch the result of a file translation task
        """
        return GetFileTranslateCallBuilder(self.client)

    def image_translate(self) -> 'ImageTranslateCallBuilder':
        """
        Create builder to help you perform the following task:
        translate the text in a picture
        """
        return ImageTranslateCallBuilder(self.client)

    def language_detect(self) -> 'LanguageDetectCallBuilder':
        """
        Create builder to help you perform the following task:
        detect which language a text is written in
        """
        return LanguageDetectCallBuilder(self.client)

    def speech_translate(self) -> 'SpeechTranslateCallBuilder':
        """
        Create builder to help you perform the following task:
        translate a segment of speech
        """
        return SpeechTranslateCallBuilder(self.client)

    def text_translate(self) -> 'TextTranslateCallBuilder':
        """
        Create builder to help you perform the following task:
        translate text
        """
        return TextTranslateCallBuilder(self.client)

    def text_batch_translate(self) -> 'TextTranslateBatchCallBuilder':
        """
        Create builder to help you perform the following task:
        translate a list of texts in one request
        """
        return TextTranslateBatchCallBuilder(self.client)


class _LanguagePairMixin:
    """Source and target language setters shared by most tmt builders."""

    _source: Optional[str]
    _target: Optional[str]

    def source(self, source: str):
        """Source language code, e.g. "en", or "auto" where supported."""
        self._source = source
        return self

    def target(self, target: str):
        """Target language code, e.g. "zh"."""
        self._target = target
        return self


class _ProjectMixin:
    _project_id: Optional[int]

    def project_id(self, project_id: int):
        """Project id from the console; 0 is the default project."""
        self._project_id = check_uint('project_id', project_id)
        return self


class TextTranslateCallBuilder(_LanguagePairMixin, _ProjectMixin, CallBuilder):
    """Builder for TextTranslate."""

    ACTION = "TextTranslate"
    METHOD_ID = "tmt.TextTranslate"
    REQUIRED = ('source_text', 'source', 'target', 'project_id')

    def __init__(self, client: 'TencentClient'):
        super().__init__(client)
        self._source_text: Optional[str] = None
        self._source: Optional[str] = None
        self._target: Optional[str] = None
        self._project_id: Optional[int] = None
        self._untranslated_text: Optional[str] = None

    def source_text(self, source_text: str) -> 'TextTranslateCallBuilder':
        """Text to translate, UTF-8, fewer than 6000 characters."""
        self._source_text = source_text
        return self

    def untranslated_text(self, untranslated_text: str) -> 'TextTranslateCallBuilder':
        """Text that must be kept as-is in the translation."""
        self._untranslated_text = untranslated_text
        return self

    def _payload(self) -> Dict[str, Any]:
        return {
            'SourceText': self._source_text,
            'Source': self._source,
            'Target': self._target,
            'ProjectId': self._project_id,
            'UntranslatedText': self._untranslated_text,
        }


class TextTranslateBatchCallBuilder(_LanguagePairMixin, _ProjectMixin, CallBuilder):
    """Builder for TextTranslateBatch."""

    ACTION = "TextTranslateBatch"
    METHOD_ID = "tmt.TextTranslateBatch"
    REQUIRED = ('source', 'target', 'project_id', 'source_text_list')

    def __init__(self, client: 'TencentClient'):
        super().__init__(client)
        self._source: Optional[str] = None
        self._target: Optional[str] = None
        self._project_id: Optional[int] = None
        self._source_text_list: Optional[List[str]] = None

    def source_text_list(self, source_text_list: List[str]) -> 'TextTranslateBatchCallBuilder':
        """Texts to translate; the list is copied."""
        if isinstance(source_text_list, str):
            raise InvalidInputError(
                "source_text_list must be a list of strings, not a string",
                "INVALID_PARAMETER",
                {"field": "source_text_list"}
            )
        self._source_text_list = list(source_text_list)
        return self

    def _payload(self) -> Dict[str, Any]:
        return {
            'ProjectId': self._project_id,
            'Source': self._source,
            'Target': self._target,
            'SourceTextList': self._source_text_list,
        }


class LanguageDetectCallBuilder(_ProjectMixin, CallBuilder):
    """Builder for LanguageDetect."""

    ACTION = "LanguageDetect"
    METHOD_ID = "tmt.LanguageDetect"
    REQUIRED = ('text', 'project_id')

    def __init__(self, client: 'TencentClient'):
        super().__init__(client)
        self._text: Optional[str] = None
        self._project_id: Optional[int] = None

    def text(self, text: str) -> 'LanguageDetectCallBuilder':
        self._text = text
        return self

    def _payload(self) -> Dict[str, Any]:
        return {
            'ProjectId': self._project_id,
            'Text': self._text,
        }


class ImageTranslateCallBuilder(_LanguagePairMixin, _ProjectMixin, CallBuilder):
    """
    Builder for ImageTranslate.

    The image is read and base64 encoded by ``build()``; it must be
    smaller than 4 MiB, so compress large pictures first.
    """

    ACTION = "ImageTranslate"
    METHOD_ID = "tmt.ImageTranslate"
    REQUIRED = ('session_uuid', 'scene', 'image_path', 'source', 'target', 'project_id')

    def __init__(self, client: 'TencentClient'):
        super().__init__(client)
        self._session_uuid: Optional[str] = None
        self._scene: Optional[str] = None
        self._image_path: Optional[Path] = None
        self._source: Optional[str] = None
        self._target: Optional[str] = None
        self._project_id: Optional[int] = None

    def session_uuid(self, session_uuid: str) -> 'ImageTranslateCallBuilder':
        """Caller-chosen id echoed back in the response."""
        self._session_uuid = session_uuid
        return self

    def scene(self, scene: str) -> 'ImageTranslateCallBuilder':
        """Recognition scene; the API currently accepts "doc"."""
        self._scene = scene
        return self

    def image_path(self, image_path: Union[str, Path]) -> 'ImageTranslateCallBuilder':
        self._image_path = Path(image_path)
        return self

    def _payload(self) -> Dict[str, Any]:
        return {
            'ProjectId': self._project_id,
            'Source': self._source,
            'Target': self._target,
            'SessionUuid': self._session_uuid,
            'Scene': self._scene,
            'Data': read_media(self._image_path, 'image'),
        }


class SpeechTranslateCallBuilder(_LanguagePairMixin, _ProjectMixin, CallBuilder):
    """
    Builder for SpeechTranslate.

    Audio is streamed as numbered segments sharing one session uuid; the
    last segment sets ``is_end(1)``. Each segment must be smaller than 4 MiB.
    """

    ACTION = "SpeechTranslate"
    METHOD_ID = "tmt.SpeechTranslate"
    REQUIRED = ('session_uuid', 'source', 'target', 'audio_path', 'audio_format', 'seq', 'is_end')

    def __init__(self, client: 'TencentClient'):
        super().__init__(client)
        self._session_uuid: Optional[str] = None
        self._source: Optional[str] = None
        self._target: Optional[str] = None
        self._audio_path: Optional[Path] = None
        self._audio_format: Optional[int] = None
        self._seq: Optional[int] = None
        self._is_end: Optional[int] = None
        self._project_id: Optional[int] = None

    def session_uuid(self, session_uuid: str) -> 'SpeechTranslateCallBuilder':
        self._session_uuid = session_uuid
        return self

    def audio_path(self, audio_path: Union[str, Path]) -> 'SpeechTranslateCallBuilder':
        self._audio_path = Path(audio_path)
        return self

    def audio_format(self, audio_format: int) -> 'SpeechTranslateCallBuilder':
        """Audio encoding: 146 for PCM, 83 for speex."""
        self._audio_format = check_uint('audio_format', audio_format)
        return self

    def seq(self, seq: int) -> 'SpeechTranslateCallBuilder':
        """Segment sequence number, starting at 0."""
        self._seq = check_uint('seq', seq)
        return self

    def is_end(self, is_end: int) -> 'SpeechTranslateCallBuilder':
        """1 for the last segment of the session, otherwise 0."""
        self._is_end = check_uint('is_end', int(is_end) if isinstance(is_end, bool) else is_end, 1)
        return self

    def _payload(self) -> Dict[str, Any]:
        return {
            'ProjectId': self._project_id,
            'Source': self._source,
            'Target': self._target,
            'SessionUuid': self._session_uuid,
            'Data': read_media(self._audio_path, 'audio'),
            'AudioFormat': self._audio_format,
            'Seq': self._seq,
            'IsEnd': self._is_end,
        }


class FileTranslateCallBuilder(_LanguagePairMixin, CallBuilder):
    """
    Builder for FileTranslate.

    The document is given either by ``url`` or inline as base64 ``data``.
    The response carries a task id for ``get_file_translate_data``.
    """

    ACTION = "FileTranslate"
    METHOD_ID = "tmt.FileTranslate"
    REQUIRED = ('source', 'target', 'document_type')
    REGION_REQUIRED = False

    def __init__(self, client: 'TencentClient'):
        super().__init__(client)
        self._source: Optional[str] = None
        self._target: Optional[str] = None
        self._document_type: Optional[str] = None
        self._basic_document_type: Optional[str] = None
        self._source_type: Optional[int] = None
        self._url: Optional[str] = None
        self._callback_url: Optional[str] = None
        self._data: Optional[str] = None

    def document_type(self, document_type: str) -> 'FileTranslateCallBuilder':
        """Document format: docx, pdf, xlsx, pptx, txt, ..."""
        self._document_type = document_type
        return self

    def basic_document_type(self, basic_document_type: str) -> 'FileTranslateCallBuilder':
        self._basic_document_type = basic_document_type
        return self

    def source_type(self, source_type: int) -> 'FileTranslateCallBuilder':
        """0 when the document is given by url, 1 when given as data."""
        self._source_type = check_uint('source_type', source_type, 0xFF)
        return self

    def url(self, url: str) -> 'FileTranslateCallBuilder':
        self._url = url
        return self

    def callback_url(self, callback_url: str) -> 'FileTranslateCallBuilder':
        """URL the service calls when the task completes."""
        self._callback_url = callback_url
        return self

    def data(self, data: str) -> 'FileTranslateCallBuilder':
        """Base64 encoded document content."""
        self._data = data
        return self

    def _payload(self) -> Dict[str, Any]:
        return {
            'Source': self._source,
            'Target': self._target,
            'DocumentType': self._document_type,
            'BasicDocumentType': self._basic_document_type,
            'SourceType': self._source_type,
            'Url': self._url,
            'CallbackUrl': self._callback_url,
            'Data': self._data,
        }


class GetFileTranslateCallBuilder(CallBuilder):
    """Builder for GetFileTranslate."""

    ACTION = "GetFileTranslate"
    METHOD_ID = "tmt.getFileTranslateData"
    REQUIRED = ('task_id',)
    REGION_REQUIRED = False

    def __init__(self, client: 'TencentClient'):
        super().__init__(client)
        self._task_id: Optional[str] = None

    def task_id(self, task_id: str) -> 'GetFileTranslateCallBuilder':
        self._task_id = task_id
        return self

    def _payload(self) -> Dict[str, Any]:
        return {'TaskId': self._task_id}
