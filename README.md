# oaiclient

A small Python client for an assistants-style HTTP API, built on the standard
library alone. It covers models, moderation, text-to-speech, completion
streaming over server-sent events, threads, messages, runs and run steps, and
vector stores with their files and file batches.

## Installation

```
pip install oaiclient
```

## Configuration and transport

Every endpoint class takes a `Transport`, built from a `ClientConfig`:

```python
from oaiclient.transport import ClientConfig, Transport

config = ClientConfig(auth_token="placeholder")
transport = Transport(config)
```

`ClientConfig` holds `auth_token`, `base_url` (default
`https://api.openai.com/v1`), `org_id`, `assistant_version` (default `v2`,
sent in the `OpenAI-Beta` header on assistant endpoints),
`empty_messages_limit` (default 300) and `timeout` in seconds.

- `Transport.full_url(suffix)` joins the base URL and a path.
- `Transport.request(method, suffix, body, beta)` sends a JSON request and
  returns a reply with `body`, `headers` and `json()`.
- `Transport.request_raw(...)` returns the open response for reading bytes.
- `Transport.stream(...)` returns a `StreamReader` over server-sent events.

When the server answers with an HTTP error, an `APIError` is raised carrying
`message`, `type`, `param`, `code` and `status_code`. A timed-out connection
raises `TimeoutError`.

### Rate limits

`RateLimitHeaders.from_headers(headers)` reads the `x-ratelimit-*` headers of
a reply (`reply.headers`, or the `headers` field of any returned object).
Missing or malformed counts become 0. `reset_requests` and `reset_tokens` are
`ResetTime` strings such as `6m0s`; `ResetTime.time()` gives the moment the
limit resets, or now when the value cannot be parsed.

### Pagination

List calls for runs, run steps, vector stores and vector store files accept a
`Pagination(limit=..., order=..., after=..., before=...)`. Only the options
that are set are sent.

## Models

```python
from oaiclient.models import ModelsAPI

models = ModelsAPI(transport)
for model in models.list_models().models:
    print(model.id, model.owned_by)
model = models.get_model("text-davinci-003")
models.delete_fine_tune_model("fine-tune-model-id")
```

## Moderation

```python
from oaiclient.moderation import ModerationAPI, ModerationRequest

response = ModerationAPI(transport).moderations(
    ModerationRequest(input="some text", model="text-moderation-stable")
)
print(response.results[0].flagged, response.results[0].categories.violence)
```

An empty model lets the server choose. Any model other than
`omni-moderation-latest`, `omni-moderation-2024-09-26`,
`text-moderation-stable` or `text-moderation-latest` raises
`ModerationInvalidModelError` before a request is sent.

## Speech

```python
from oaiclient.speech import CreateSpeechRequest, SpeechAPI, SpeechModel, SpeechVoice

response = SpeechAPI(transport).create_speech(
    CreateSpeechRequest(model=SpeechModel.TTS_1, input="Hello!", voice=SpeechVoice.ALLOY)
)
with response:
    audio = response.read()
```

## Streaming completions

```python
from oaiclient.stream import CompletionStreamAPI

stream = CompletionStreamAPI(transport).create_completion_stream(
    {"model": "text-davinci-002", "prompt": "Hello", "max_tokens": 10}
)
with stream:
    for chunk in stream:
        print(chunk)
```

The request may be a mapping or any object with `to_dict()`; `stream` is set
to true for you. Events come back as decoded dictionaries. A prompt that is
neither a string nor a list of strings raises
`CompletionRequestPromptTypeError`.

`StreamReader.recv()` returns the next decoded event and `recv_raw()` its raw
bytes; both raise `EOFError` once the server sends `data: [DONE]` or the
connection ends. Iterating a reader stops at that point. More non-data lines
in a row than `empty_messages_limit` raise `TooManyEmptyStreamMessagesError`;
an error object sent in the stream is raised as `APIError`.

## Threads, messages and runs

```python
from oaiclient.messages import MessageRequest, MessagesAPI
from oaiclient.run import RunRequest, RunsAPI
from oaiclient.thread import ThreadMessage, ThreadMessageRole, ThreadRequest, ThreadsAPI

thread = ThreadsAPI(transport).create_thread(
    ThreadRequest(messages=[ThreadMessage(role=ThreadMessageRole.USER, content="Hello!")])
)
messages = MessagesAPI(transport)
messages.create_message(thread.id, MessageRequest(role="user", content="How does it work?"))
listing = messages.list_messages(thread.id, limit=10, order="desc")

runs = RunsAPI(transport)
run = runs.create_run(thread.id, RunRequest(assistant_id="asst_abc123"))
print(run.status)
```

`ThreadsAPI` creates, retrieves, modifies and deletes threads. `MessagesAPI`
creates, lists, retrieves, modifies and deletes messages and retrieves or
lists message files. `RunsAPI` creates, retrieves, modifies, lists and
cancels runs, submits tool outputs, creates a thread and run in one call, and
retrieves or lists run steps. Run and step statuses come back as `RunStatus`
and `RunStepStatus` members.

## Vector stores

```python
from oaiclient.vector_store import VectorStoreRequest, VectorStoresAPI

stores = VectorStoresAPI(transport)
store = stores.create_vector_store(VectorStoreRequest(name="docs"))
stores.create_vector_store_file(store.id, "file_abc123")
batch = stores.create_vector_store_file_batch(store.id, ["file_abc123"])
stores.cancel_vector_store_file_batch(store.id, batch.id)
```

## Reasoning-model checks

`ReasoningValidator().validate(request)` checks a chat request, given as a
mapping or an object with matching attributes, meant for an o1- or o3-series
model. It raises `ReasoningModelMaxTokensDeprecatedError`,
`ReasoningModelLimitationsLogprobsError` or
`ReasoningModelLimitationsOtherError` when the request sets a parameter that
those models do not accept. Requests for other models pass unchecked.

## What it does not do

- There is no chat completion, non-streaming completion, embeddings, images,
  audio transcription or translation, files, fine-tuning or assistants
  endpoint; the completion stream does not check whether the model suits the
  completions endpoint.
- Only bearer-token authentication against a plain base URL is supported;
  there are no other API flavours or URL schemes.
- There is no command-line program; it is a library only.