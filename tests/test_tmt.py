"""
Tests for the machine translation call builders and call execution

Requests never leave the process: transports are replaced by mocks that
record what would have been sent.
"""

import base64
import itertools
import json
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from tencent_sdk import (
    ClientConfig,
    Credential,
    Delegate,
    HttpMethod,
    HttpxTransport,
    LoggingDelegate,
    SignableRequest,
    TencentClient,
    TransportResponse,
    create_client,
    create_signing_config,
)
from tencent_sdk.api import MAX_MEDIA_SIZE, serialize_payload
from tencent_sdk.exceptions import (
    EncodingError,
    HttpFailureError,
    InvalidInputError,
    MissingFieldError,
    SigningError,
    TransportError,
)

TMT_TIMESTAMP = 1700000000
TMT_BODY = b'{"SourceText":"hello","Source":"en","Target":"zh","ProjectId":0}'
TMT_AUTHORIZATION = (
    "TC3-HMAC-SHA256 Credential=AKIDEXAMPLE/2023-11-14/tmt/tc3_request, "
    "SignedHeaders=content-type;host, "
    "Signature=7a1d71a62e19765db2c0c7e2ca43f3d1580d661e4098b34f117a5511ab537222"
)


@pytest.fixture
def transport():
    """Blocking transport answering 200 with an empty Response object"""
    mock = Mock(spec=["send"])
    mock.send.return_value = TransportResponse(status_code=200, content=b'{"Response":{"RequestId":"r-1"}}')
    return mock


@pytest.fixture
def client(transport):
    return TencentClient(Credential("AKIDEXAMPLE", "secret"), transport)


def text_translate(client):
    return (client.translate()
            .text_translate()
            .source_text("hello")
            .source("en")
            .target("zh")
            .project_id(0)
            .region("ap-guangzhou"))


class RecordingDelegate(Delegate):
    def __init__(self):
        self.events = []

    def begin(self, info):
        self.events.append(("begin", info.id, info.http_method.value))

    def pre_request(self, request):
        self.events.append(("pre_request", request.headers["X-TC-Action"]))

    def finished(self, is_success):
        self.events.append(("finished", is_success))


class TestPayloadSerialization:
    """Test JSON body encoding"""

    def test_compact_and_ordered(self):
        body = serialize_payload({"SourceText": "hello", "Source": "en", "Target": "zh", "ProjectId": 0})
        assert body == TMT_BODY

    def test_unset_fields_skipped(self):
        assert serialize_payload({"TaskId": "t-1", "Url": None}) == b'{"TaskId":"t-1"}'

    def test_non_ascii_kept_as_utf8(self):
        body = serialize_payload({"SourceText": "Credere è destino"})
        assert body == '{"SourceText":"Credere è destino"}'.encode("utf-8")

    def test_unserializable_value(self):
        with pytest.raises(EncodingError):
            serialize_payload({"Data": object()})


class TestTextTranslate:
    """Test TextTranslate building and sending"""

    def test_build(self, client, transport):
        """Build serializes the body without sending anything"""
        call = text_translate(client).build()

        assert call.action == "TextTranslate"
        assert call.region == "ap-guangzhou"
        assert call.body == TMT_BODY
        transport.send.assert_not_called()

    def test_golden_request(self, client, transport):
        """Pinned timestamp produces the known Authorization header"""
        call = text_translate(client).timestamp(TMT_TIMESTAMP).build()

        result = call.doit(json.loads)

        assert result == {"Response": {"RequestId": "r-1"}}
        request = transport.send.call_args[0][0]
        assert request.method == "POST"
        assert request.url == "https://tmt.tencentcloudapi.com/"
        assert request.body == TMT_BODY
        assert request.headers == {
            "Host": "tmt.tencentcloudapi.com",
            "Content-Type": "application/json; charset=utf-8",
            "User-Agent": "Mozilla/5.0 Safari/537.36",
            "X-TC-Language": "zh-CN",
            "X-TC-RequestClient": "python-sdk",
            "Authorization": TMT_AUTHORIZATION,
            "X-TC-Timestamp": "1700000000",
            "X-TC-Action": "TextTranslate",
            "X-TC-Version": "2018-03-21",
            "X-TC-Region": "ap-guangzhou",
        }

    def test_signs_action_header(self, transport):
        """Companion headers can be added to the signed set"""
        signing_config = create_signing_config().service("tmt").add_header("X-TC-Action").build()
        client = TencentClient(Credential("AKIDEXAMPLE", "secret"), transport, signing_config=signing_config)

        text_translate(client).timestamp(TMT_TIMESTAMP).build().doit(lambda body: None)

        request = transport.send.call_args[0][0]
        authorization = request.headers["Authorization"]
        assert "SignedHeaders=content-type;host;x-tc-action," in authorization
        assert authorization != TMT_AUTHORIZATION

        # The server recomputes the signature from the headers it receives
        unsigned = {k: v for k, v in request.headers.items() if k != "Authorization"}
        expected = client.signer.sign_request(
            SignableRequest(HttpMethod.POST, "tmt.tencentcloudapi.com", unsigned, body=request.body),
            TMT_TIMESTAMP,
        )
        assert authorization == expected.authorization

    def test_signs_all_companion_headers(self, transport):
        signing_config = (create_signing_config()
                          .service("tmt")
                          .signed_headers(["X-TC-Action", "X-TC-Timestamp", "X-TC-Version", "X-TC-Region"])
                          .build())
        client = TencentClient(Credential("AKIDEXAMPLE", "secret"), transport, signing_config=signing_config)

        text_translate(client).timestamp(TMT_TIMESTAMP).build().doit(lambda body: None)

        authorization = transport.send.call_args[0][0].headers["Authorization"]
        assert "SignedHeaders=content-type;host;x-tc-action;x-tc-region;x-tc-timestamp;x-tc-version," in authorization

    def test_untranslated_text(self, client):
        call = text_translate(client).untranslated_text("hello").build()
        assert json.loads(call.body)["UntranslatedText"] == "hello"

    @pytest.mark.parametrize("missing", ["source_text", "source", "target", "project_id"])
    def test_missing_field(self, client, transport, missing):
        """Each required parameter is reported by name, and nothing is sent"""
        builder = client.translate().text_translate().region("ap-guangzhou")
        values = {"source_text": "hello", "source": "en", "target": "zh", "project_id": 0}
        for name, value in values.items():
            if name != missing:
                getattr(builder, name)(value)

        with pytest.raises(MissingFieldError) as exc_info:
            builder.build()

        assert exc_info.value.field == missing
        assert exc_info.value.action == "TextTranslate"
        assert f"'{missing}'" in str(exc_info.value)
        assert isinstance(exc_info.value, InvalidInputError)
        transport.send.assert_not_called()

    def test_first_missing_field_reported(self, client):
        with pytest.raises(MissingFieldError) as exc_info:
            client.translate().text_translate().target("zh").build()
        assert exc_info.value.field == "source_text"

    def test_missing_region(self, client):
        builder = (client.translate().text_translate()
                   .source_text("hello").source("en").target("zh").project_id(0))

        with pytest.raises(MissingFieldError) as exc_info:
            builder.build()
        assert exc_info.value.field == "region"

    def test_default_region(self, transport):
        """Client default region is used when the call sets none"""
        client = create_client("AKIDEXAMPLE", "secret", region="ap-shanghai", transport=transport)
        call = (client.translate().text_translate()
                .source_text("hello").source("en").target("zh").project_id(0)
                .build())

        call.doit(lambda body: None)

        assert call.region == "ap-shanghai"
        assert transport.send.call_args[0][0].headers["X-TC-Region"] == "ap-shanghai"

    @pytest.mark.parametrize("project_id", [-1, 2 ** 32, "0", True])
    def test_invalid_project_id(self, client, project_id):
        with pytest.raises(InvalidInputError) as exc_info:
            client.translate().text_translate().project_id(project_id)
        assert exc_info.value.error_code == "INVALID_PARAMETER"

    def test_invalid_pinned_timestamp(self, client):
        with pytest.raises(SigningError):
            text_translate(client).timestamp(0)

    def test_fresh_timestamp_per_send(self, transport):
        """Unpinned calls are re-signed with a new timestamp on every send"""
        clock = itertools.count(TMT_TIMESTAMP)
        signing_config = create_signing_config().service("tmt").timestamp_generator(lambda: next(clock)).build()
        client = TencentClient(Credential("AKIDEXAMPLE", "secret"), transport, signing_config=signing_config)
        call = text_translate(client).build()

        call.doit(lambda body: None)
        call.doit(lambda body: None)

        first, second = (c[0][0].headers for c in transport.send.call_args_list)
        assert int(second["X-TC-Timestamp"]) == int(first["X-TC-Timestamp"]) + 1
        assert first["Authorization"] != second["Authorization"]


class TestCallExecution:
    """Test doit and delegate behaviour"""

    def test_callback_gets_raw_bytes(self, client, transport):
        transport.send.return_value = TransportResponse(200, b'{"Response":{"Error":{"Code":"AuthFailure"}}}')
        received = []

        call = text_translate(client).build()
        call.doit(received.append)

        # Application errors arrive with HTTP 200 and are left to the caller
        assert received == [b'{"Response":{"Error":{"Code":"AuthFailure"}}}']

    def test_http_failure(self, client, transport):
        transport.send.return_value = TransportResponse(502, b"bad gateway", {"Server": "nginx"})
        callback = Mock()

        with pytest.raises(HttpFailureError, match="Http status indicates failure: 502") as exc_info:
            text_translate(client).build().doit(callback)

        assert exc_info.value.http_status == 502
        assert exc_info.value.body == b"bad gateway"
        assert exc_info.value.headers == {"Server": "nginx"}
        assert isinstance(exc_info.value, TransportError)
        callback.assert_not_called()

    def test_transport_error_propagates(self, client, transport):
        transport.send.side_effect = TransportError("Connection error: refused", "CONNECTION_ERROR")

        with pytest.raises(TransportError) as exc_info:
            text_translate(client).build().doit(Mock())
        assert exc_info.value.error_code == "CONNECTION_ERROR"

    def test_delegate_order_on_success(self, client):
        delegate = RecordingDelegate()
        text_translate(client).delegate(delegate).build().doit(lambda body: None)

        assert delegate.events == [
            ("begin", "tmt.TextTranslate", "POST"),
            ("pre_request", "TextTranslate"),
            ("finished", True),
        ]

    def test_delegate_finished_on_failure(self, client, transport):
        transport.send.return_value = TransportResponse(500, b"")
        delegate = RecordingDelegate()

        with pytest.raises(HttpFailureError):
            text_translate(client).delegate(delegate).build().doit(lambda body: None)

        assert delegate.events[-1] == ("finished", False)

    def test_delegate_finished_when_callback_raises(self, client):
        delegate = RecordingDelegate()

        def callback(body):
            raise ValueError("unexpected response")

        with pytest.raises(ValueError):
            text_translate(client).delegate(delegate).build().doit(callback)

        assert delegate.events[-1] == ("finished", False)

    def test_logging_delegate(self, client, caplog):
        with caplog.at_level("DEBUG", logger="tencent_sdk.client"):
            text_translate(client).delegate(LoggingDelegate()).build().doit(lambda body: None)

        assert "Begin tmt.TextTranslate" in caplog.text
        assert "Finished tmt.TextTranslate: success=True" in caplog.text

    def test_request_headers_logged_without_authorization(self, transport, caplog):
        config = ClientConfig(debug={"log_request_headers": True})
        client = TencentClient(Credential("AKIDEXAMPLE", "secret"), transport, config)

        with caplog.at_level("DEBUG", logger="tencent_sdk.api.base"):
            text_translate(client).build().doit(lambda body: None)

        assert "X-TC-Action" in caplog.text
        assert "Signature=" not in caplog.text

    def test_blocking_send_required(self):
        client = TencentClient(Credential("AKIDEXAMPLE", "secret"), Mock(spec=["send_async"]))
        with pytest.raises(TypeError, match="use doit_async"):
            text_translate(client).build().doit(lambda body: None)

    @pytest.mark.asyncio
    async def test_doit_async(self):
        transport = Mock(spec=["send_async"])
        transport.send_async = AsyncMock(return_value=TransportResponse(200, b'{"Response":{}}'))
        client = TencentClient(Credential("AKIDEXAMPLE", "secret"), transport)

        async def callback(body):
            return json.loads(body)

        result = await text_translate(client).timestamp(TMT_TIMESTAMP).build().doit_async(callback)

        assert result == {"Response": {}}
        request = transport.send_async.await_args[0][0]
        assert request.headers["Authorization"] == TMT_AUTHORIZATION

    @pytest.mark.asyncio
    async def test_doit_async_over_httpx(self):
        """Async calls through the httpx transport"""
        async def handler(request):
            assert request.headers["X-TC-Action"] == "TextTranslate"
            assert request.content == TMT_BODY
            return httpx.Response(200, content=b'{"Response":{"TargetText":"ni hao"}}')

        transport = HttpxTransport(async_transport=httpx.MockTransport(handler))
        client = TencentClient(Credential("AKIDEXAMPLE", "secret"), transport)

        text = await text_translate(client).build().doit_async(
            lambda body: json.loads(body)["Response"]["TargetText"]
        )

        assert text == "ni hao"
        await transport.aclose()
        client.close()


class TestOtherActions:
    """Test the remaining tmt call builders"""

    def test_text_translate_batch(self, client):
        texts = ["hello", "world"]
        call = (client.translate().text_batch_translate()
                .source("en").target("zh").project_id(0)
                .source_text_list(texts)
                .region("ap-guangzhou")
                .build())
        texts.append("mutated")

        assert call.action == "TextTranslateBatch"
        assert call.body == b'{"ProjectId":0,"Source":"en","Target":"zh","SourceTextList":["hello","world"]}'

    def test_text_translate_batch_rejects_string(self, client):
        with pytest.raises(InvalidInputError):
            client.translate().text_batch_translate().source_text_list("hello")

    def test_language_detect(self, client):
        call = (client.translate().language_detect()
                .text("Hello world").project_id(0).region("ap-guangzhou").build())

        assert call.action == "LanguageDetect"
        assert call.body == b'{"ProjectId":0,"Text":"Hello world"}'

    def test_language_detect_missing_text(self, client):
        with pytest.raises(MissingFieldError) as exc_info:
            client.translate().language_detect().project_id(0).region("ap-guangzhou").build()
        assert exc_info.value.field == "text"

    def test_image_translate(self, client, tmp_path):
        image = tmp_path / "menu.png"
        image.write_bytes(b"\x89PNG\r\n\x1a\n")

        call = (client.translate().image_translate()
                .session_uuid("session-1").scene("doc").image_path(image)
                .source("zh").target("en").project_id(0)
                .region("ap-guangzhou")
                .build())
        body = json.loads(call.body)

        assert list(body) == ["ProjectId", "Source", "Target", "SessionUuid", "Scene", "Data"]
        # Base64 is sent without padding
        assert body["Data"] == base64.b64encode(b"\x89PNG\r\n\x1a\n").decode().rstrip("=")
        assert not body["Data"].endswith("=")

    def test_image_too_large(self, client, tmp_path):
        image = tmp_path / "huge.png"
        image.write_bytes(b"\0" * MAX_MEDIA_SIZE)
        builder = (client.translate().image_translate()
                   .session_uuid("session-1").scene("doc").image_path(image)
                   .source("zh").target("en").project_id(0)
                   .region("ap-guangzhou"))

        with pytest.raises(InvalidInputError, match="image size should be no more than 4M") as exc_info:
            builder.build()
        assert exc_info.value.error_code == "PAYLOAD_TOO_LARGE"

    def test_image_missing_file(self, client, tmp_path):
        builder = (client.translate().image_translate()
                   .session_uuid("session-1").scene("doc").image_path(tmp_path / "absent.png")
                   .source("zh").target("en").project_id(0)
                   .region("ap-guangzhou"))

        with pytest.raises(InvalidInputError) as exc_info:
            builder.build()
        assert exc_info.value.error_code == "FILE_ERROR"

    def test_speech_translate(self, client, tmp_path):
        audio = tmp_path / "segment.pcm"
        audio.write_bytes(b"\x01\x02\x03\x04")

        call = (client.translate().speech_translate()
                .session_uuid("session-1").source("zh").target("en")
                .audio_path(audio).audio_format(146).seq(0).is_end(True)
                .region("ap-guangzhou")
                .build())
        body = json.loads(call.body)

        assert "ProjectId" not in body
        assert body["Data"] == "AQIDBA"
        assert body["AudioFormat"] == 146
        assert body["Seq"] == 0
        assert body["IsEnd"] == 1

    def test_speech_translate_is_end_range(self, client):
        with pytest.raises(InvalidInputError):
            client.translate().speech_translate().is_end(2)

    def test_file_translate_without_region(self, client):
        """FileTranslate does not need a region"""
        call = (client.translate().file_translate()
                .source("en").target("zh").document_type("docx")
                .url("https://example.com/a.docx").source_type(0)
                .build())

        assert call.region is None
        assert call.body == (
            b'{"Source":"en","Target":"zh","DocumentType":"docx",'
            b'"SourceType":0,"Url":"https://example.com/a.docx"}'
        )

    def test_file_translate_missing_document_type(self, client):
        with pytest.raises(MissingFieldError) as exc_info:
            client.translate().file_translate().source("en").target("zh").build()
        assert exc_info.value.field == "document_type"

    def test_get_file_translate(self, client, transport):
        delegate = RecordingDelegate()
        call = client.translate().get_file_translate_data().task_id("task-1").delegate(delegate).build()

        call.doit(lambda body: None)

        request = transport.send.call_args[0][0]
        assert request.body == b'{"TaskId":"task-1"}'
        assert request.headers["X-TC-Action"] == "GetFileTranslate"
        assert "X-TC-Region" not in request.headers
        assert delegate.events[0] == ("begin", "tmt.getFileTranslateData", "POST")


class TestClient:
    """Test client construction"""

    def test_empty_credential(self, transport):
        with pytest.raises(SigningError):
            TencentClient(Credential("", ""), transport)

    def test_default_transport(self):
        client = TencentClient.native(Credential("AKIDEXAMPLE", "secret"))
        assert hasattr(client.transport, "send")
        client.close()

    def test_context_manager_closes_transport(self):
        transport = Mock(spec=["send", "close"])
        with TencentClient(Credential("AKIDEXAMPLE", "secret"), transport):
            pass
        transport.close.assert_called_once()

    def test_secret_key_not_logged(self, transport, caplog):
        with caplog.at_level("INFO", logger="tencent_sdk.client"):
            TencentClient(Credential("AKIDEXAMPLE", "top-secret-key"), transport)
        assert "top-secret-key" not in caplog.text
