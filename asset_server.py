#!/usr/bin/env python3
"""
Static Asset Server Using Socket Programming

Serves a built web application (by default a Flutter web build under
``build/web``) to browsers and automated browser-test clients:
- Thread pool of workers fed by an accept loop
- Read-only file serving from a single root directory
- Canonical path containment (traversal, symlink and sibling-prefix escapes)
- Fixed extension to Content-Type table
- Keep-alive connections with idle timeouts
- Graceful shutdown through an explicit shutdown channel, bounded by a
  forced-close deadline
- Console and file logging

Python Version: 3.7+
"""

import datetime
import errno
import logging
import os
import queue
import signal
import socket
import sys
import threading
import time
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple
from urllib.parse import unquote, urlsplit


DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_ROOT = os.path.join("build", "web")
DEFAULT_DOCUMENT = "index.html"
DEFAULT_MAX_THREADS = 10
DEFAULT_KEEP_ALIVE_TIMEOUT = 30.0
DEFAULT_SHUTDOWN_TIMEOUT = 10.0
DEFAULT_LOG_FILE = os.path.join("logs", "server.log")
DEFAULT_CONTENT_TYPE = "application/octet-stream"
ERROR_CONTENT_TYPE = "text/plain; charset=utf-8"

LOGGER_NAME = "AssetServer"
LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(threadName)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_REQUEST_SIZE = 8192
MAX_REQUESTS_PER_CONNECTION = 100
LISTEN_BACKLOG = 50
POLL_INTERVAL = 0.5
SEND_CHUNK_SIZE = 65536

CONTENT_TYPES = MappingProxyType(dict([
    ('.html', 'text/html'),
    ('.js', 'text/javascript'),
    ('.css', 'text/css'),
    ('.json', 'application/json'),
    ('.png', 'image/png'),
    ('.jpg', 'image/jpeg'),
    ('.gif', 'image/gif'),
    ('.svg', 'image/svg+xml'),
    ('.wav', 'audio/wav'),
    ('.mp3', 'audio/mpeg'),
    ('.mp4', 'video/mp4'),
    ('.woff', 'application/font-woff'),
    ('.ttf', 'application/font-ttf'),
    ('.eot', 'application/vnd.ms-fontobject'),
    ('.otf', 'application/font-otf'),
    ('.wasm', 'application/wasm'),
]))

STATUS_MESSAGES = {
    200: "OK",
    400: "Bad Request",
    403: "Forbidden",
    404: "Not Found",
    500: "Internal Server Error",
}


class AssetServerError(Exception):
    """Base class for asset server errors."""


class PathTraversalRejected(AssetServerError):
    """Request path resolves outside the root directory."""

    def __init__(self, path: str):
        super().__init__(f"Path escapes root directory: {path!r}")
        self.path = path


class MalformedRequest(AssetServerError):
    """Request head could not be read or parsed."""


class BindFailure(AssetServerError):
    """Listening socket could not be acquired. Fatal at startup."""

    def __init__(self, host: str, port: int, reason: OSError):
        super().__init__(f"Cannot bind {host}:{port}: {reason}")
        self.host = host
        self.port = port
        self.reason = reason


class ServerState(Enum):
    STARTING = "starting"
    LISTENING = "listening"
    SHUTTING_DOWN = "shutting-down"
    STOPPED = "stopped"


# (attribute, environment variable, converter)
_ENV_SETTINGS = (
    ('host', 'ASSET_SERVER_HOST', str),
    ('port', 'ASSET_SERVER_PORT', int),
    ('root', 'ASSET_SERVER_ROOT', str),
    ('default_document', 'ASSET_SERVER_DEFAULT_DOCUMENT', str),
    ('max_threads', 'ASSET_SERVER_MAX_THREADS', int),
    ('keep_alive_timeout', 'ASSET_SERVER_KEEP_ALIVE_TIMEOUT', float),
    ('shutdown_timeout', 'ASSET_SERVER_SHUTDOWN_TIMEOUT', float),
    ('log_file', 'ASSET_SERVER_LOG_FILE', str),
    ('log_level', 'ASSET_SERVER_LOG_LEVEL', str),
)


class ServerConfig:
    """
    Immutable-by-convention server configuration, fixed at process start.

    Args:
        host: Interface to bind (default: 127.0.0.1)
        port: TCP port, 0 picks an ephemeral port (default: 3000)
        root: Directory whose files are served (default: build/web)
        default_document: File served for "/" (default: index.html)
        max_threads: Worker pool size (default: 10)
        keep_alive_timeout: Idle seconds before a connection is closed
        shutdown_timeout: Seconds to drain connections before forcing them closed
        log_file: Log file path, None disables file logging
        log_level: Logging level name
    """

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT,
                 root: str = DEFAULT_ROOT, default_document: str = DEFAULT_DOCUMENT,
                 max_threads: int = DEFAULT_MAX_THREADS,
                 keep_alive_timeout: float = DEFAULT_KEEP_ALIVE_TIMEOUT,
                 shutdown_timeout: float = DEFAULT_SHUTDOWN_TIMEOUT,
                 log_file: Optional[str] = DEFAULT_LOG_FILE,
                 log_level: str = "INFO"):
        self.host = host
        self.port = int(port)
        self.root = os.path.abspath(root)
        self.default_document = default_document
        self.max_threads = int(max_threads)
        self.keep_alive_timeout = float(keep_alive_timeout)
        self.shutdown_timeout = float(shutdown_timeout)
        self.log_file = log_file or None
        self.log_level = log_level.upper()
        self._validate()

    def _validate(self):
        if not (0 <= self.port <= 65535):
            raise ValueError("Port must be between 0 and 65535")
        if self.max_threads < 1:
            raise ValueError("Max threads must be at least 1")
        if self.keep_alive_timeout <= 0:
            raise ValueError("Keep-alive timeout must be positive")
        if self.shutdown_timeout <= 0:
            raise ValueError("Shutdown timeout must be positive")
        document = self.default_document
        if not document or document in ('.', '..') or '/' in document or os.sep in document:
            raise ValueError(f"Default document must be a plain file name: {document!r}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ServerConfig':
        """
        Build a configuration from ASSET_SERVER_* environment variables.

        Unset variables keep their defaults; an empty ASSET_SERVER_LOG_FILE
        disables file logging.
        """
        env = os.environ if environ is None else environ
        settings = {}
        for attribute, key, convert in _ENV_SETTINGS:
            if key not in env:
                continue
            raw = env[key]
            try:
                settings[attribute] = convert(raw)
            except ValueError:
                raise ValueError(f"{key} must be {convert.__name__}, got {raw!r}") from None
        return cls(**settings)

    def as_dict(self) -> Dict:
        return {attribute: getattr(self, attribute) for attribute, _, _ in _ENV_SETTINGS}

    def replace(self, **changes) -> 'ServerConfig':
        """Return a copy with the given fields changed."""
        settings = self.as_dict()
        settings.update(changes)
        return ServerConfig(**settings)

    def __repr__(self):
        fields = ", ".join(f"{key}={value!r}" for key, value in self.as_dict().items())
        return f"ServerConfig({fields})"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the server logger with a console handler and an optional file handler.

    Calling it again replaces the previous handlers.

    Args:
        level: Logging level name
        log_file: Path of the log file, None for console only

    Returns:
        The configured server logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.setLevel(level)
    # Prevent duplicate logs
    logger.propagate = False
    return logger


def create_response(status_code: int, body, content_type: str = ERROR_CONTENT_TYPE) -> Dict:
    """
    Create a response dictionary.

    Args:
        status_code: HTTP status code
        body: Response body, str bodies are UTF-8 encoded
        content_type: Value of the Content-Type header

    Returns:
        Response dictionary with status_code, status_text, headers and body
    """
    if isinstance(body, str):
        body = body.encode('utf-8')
    return {
        'status_code': status_code,
        'status_text': STATUS_MESSAGES.get(status_code, "Unknown"),
        'headers': {
            'Content-Type': content_type,
            'Content-Length': str(len(body)),
        },
        'body': body,
    }


def parse_http_request(head: bytes) -> Optional[Dict]:
    """
    Parse a request head (request line and headers, without the blank line).

    Args:
        head: Raw request head

    Returns:
        Parsed request dictionary or None if invalid
    """
    lines = head.decode('iso-8859-1').split('\r\n')

    request_line = lines[0].split()
    if len(request_line) != 3:
        return None

    method, path, version = request_line
    if not version.startswith('HTTP/') or not (path.startswith('/') or '://' in path or path == '*'):
        return None

    headers = {}
    for line in lines[1:]:
        if ':' not in line:
            return None
        key, value = line.split(':', 1)
        headers[key.strip().lower()] = value.strip()

    return {
        'method': method.upper(),
        'path': path,
        'version': version,
        'headers': headers,
    }


class StaticFileHandler:
    """
    Maps request targets to files beneath a root directory.

    Every method is treated as a GET-style fetch. The handler never writes
    to the filesystem.
    """

    def __init__(self, root: str, default_document: str = DEFAULT_DOCUMENT,
                 content_types: Mapping[str, str] = CONTENT_TYPES):
        self.root = os.path.realpath(root)
        self.default_document = default_document
        self.content_types = content_types
        self.logger = logging.getLogger(LOGGER_NAME)

    def request_path(self, target: str) -> str:
        """Decoded path of a request target, with "/" replaced by the default document."""
        if target.startswith('/'):
            raw_path = target.partition('?')[0].partition('#')[0]
        else:
            # absolute-form, e.g. "http://localhost:3000/index.html"
            raw_path = urlsplit(target).path
        path = unquote(raw_path) or '/'
        if path == '/':
            path = '/' + self.default_document
        return path

    def resolve(self, path: str) -> str:
        """
        Resolve a decoded request path to a canonical file path under the root.

        Args:
            path: Decoded request path

        Returns:
            Absolute real path of the candidate file

        Raises:
            PathTraversalRejected: the canonical path lies outside the root
        """
        if '\x00' in path:
            raise PathTraversalRejected(path)
        candidate = os.path.realpath(os.path.join(self.root, path.lstrip('/')))
        if os.path.commonpath([self.root, candidate]) != self.root:
            raise PathTraversalRejected(path)
        return candidate

    def content_type_for(self, file_path: str) -> str:
        extension = os.path.splitext(file_path)[1].lower()
        return self.content_types.get(extension, DEFAULT_CONTENT_TYPE)

    def handle(self, method: str, target: str) -> Dict:
        """
        Produce the response for a single request.

        Args:
            method: Request method, only used for logging
            target: Request target as sent by the client

        Returns:
            Response dictionary
        """
        path = self.request_path(target)

        try:
            file_path = self.resolve(path)
        except PathTraversalRejected as e:
            self.logger.warning(f"Security violation - {method} {target}: {e}")
            return create_response(403, "Forbidden")

        try:
            with open(file_path, 'rb') as f:
                content = f.read()
        except FileNotFoundError:
            self.logger.warning(f"File not found: {file_path}")
            return create_response(404, f"File not found: {path}")
        except OSError as e:
            code = errno.errorcode.get(e.errno, type(e).__name__)
            self.logger.error(f"Error reading {file_path}: {e}")
            return create_response(500, f"Server Error: {code}")

        response = create_response(200, content, self.content_type_for(file_path))
        response['headers']['Access-Control-Allow-Origin'] = '*'
        return response


class AssetServer:
    """
    Static asset server with a fixed worker pool.

    The accept loop hands connections to worker threads through a FIFO
    queue. Shutdown is driven by ``shutdown_event``; OS signals are only
    wired to it by ``install_signal_handlers``.
    """

    def __init__(self, config: Optional[ServerConfig] = None,
                 shutdown_event: Optional[threading.Event] = None):
        """
        Args:
            config: Server configuration (default: ServerConfig())
            shutdown_event: Shutdown channel; a fresh event when omitted
        """
        self.config = config if config is not None else ServerConfig()
        self.host = self.config.host
        self.port = self.config.port
        self.handler = StaticFileHandler(self.config.root, self.config.default_document)
        self.shutdown_event = shutdown_event if shutdown_event is not None else threading.Event()
        self.state = ServerState.STARTING
        self._poll_interval = min(POLL_INTERVAL, self.config.keep_alive_timeout)

        self.server_socket = None
        self.thread_pool = []
        self.connection_queue = queue.Queue()
        self._workers_stop = threading.Event()

        self.connection_lock = threading.Lock()
        self.connections_done = threading.Condition(self.connection_lock)
        self.open_sockets = set()
        self.active_connections = 0

        self.stats_lock = threading.Lock()
        self.total_requests = 0
        self.total_connections = 0

        self.logger = logging.getLogger(LOGGER_NAME)

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}/"

    def start(self):
        """
        Bind the listening socket and start the worker pool.

        Raises:
            BindFailure: the address could not be bound
        """
        server_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            server_socket.bind((self.host, self.port))
            server_socket.listen(LISTEN_BACKLOG)
        except OSError as e:
            server_socket.close()
            self.state = ServerState.STOPPED
            raise BindFailure(self.host, self.port, e) from e

        server_socket.settimeout(POLL_INTERVAL)
        self.server_socket = server_socket
        self.port = server_socket.getsockname()[1]

        for i in range(self.config.max_threads):
            thread = threading.Thread(target=self._worker_thread, name=f"Worker-{i + 1}")
            thread.daemon = True
            thread.start()
            self.thread_pool.append(thread)

        self.state = ServerState.LISTENING
        self.logger.info(f"Server started on {self.host}:{self.port}")
        self.logger.info(f"Serving files from: {self.handler.root}")
        self.logger.info(f"Thread pool size: {self.config.max_threads}")
        if not os.path.isdir(self.handler.root):
            self.logger.warning(f"Root directory does not exist: {self.handler.root}")

    def serve(self) -> bool:
        """
        Run the accept loop until the shutdown channel fires, then drain.

        Returns:
            True if every connection finished before the shutdown timeout
        """
        if self.server_socket is None:
            raise RuntimeError("start() must be called before serve()")

        drained = False
        try:
            self._accept_loop()
        finally:
            drained = self._stop()
        return drained

    def serve_forever(self) -> bool:
        self.start()
        return self.serve()

    def shutdown(self):
        """Request a graceful shutdown. Safe from any thread or a signal handler."""
        self.shutdown_event.set()

    def _accept_loop(self):
        while not self.shutdown_event.is_set():
            try:
                client_socket, client_address = self.server_socket.accept()
            except socket.timeout:
                continue
            except OSError as e:
                if not self.shutdown_event.is_set():
                    self.logger.error(f"Error accepting connection: {e}")
                break

            self.logger.debug(f"New connection from {client_address[0]}:{client_address[1]}")
            with self.connection_lock:
                self.total_connections += 1
                self.active_connections += 1
                self.open_sockets.add(client_socket)

            self.connection_queue.put((client_socket, client_address))

    def _stop(self) -> bool:
        """Close the listener, drain connections and stop the worker pool."""
        self.shutdown_event.set()
        self.logger.info("Stopping asset server...")

        if self.server_socket is not None:
            try:
                self.server_socket.close()
            except OSError as e:
                self.logger.error(f"Error closing listening socket: {e}")
        self.state = ServerState.SHUTTING_DOWN

        self.logger.info("Waiting for active connections to complete...")
        deadline = time.monotonic() + self.config.shutdown_timeout
        with self.connections_done:
            while self.active_connections > 0:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                self.connections_done.wait(remaining)
            drained = self.active_connections == 0
            stalled = list(self.open_sockets)

        if not drained:
            self.logger.warning(f"Shutdown timeout reached, forcing {len(stalled)} connection(s) closed")
            for client_socket in stalled:
                try:
                    # wakes the worker blocked in recv(); the worker closes the socket
                    client_socket.shutdown(socket.SHUT_RDWR)
                except OSError:
                    continue

        self._workers_stop.set()
        for thread in self.thread_pool:
            thread.join(timeout=2 * POLL_INTERVAL)

        self.state = ServerState.STOPPED
        with self.stats_lock:
            total_requests = self.total_requests
        with self.connection_lock:
            total_connections = self.total_connections
        self.logger.info(f"Server stopped. Total requests: {total_requests}, "
                         f"Total connections: {total_connections}")
        return drained

    def _worker_thread(self):
        """Worker thread that processes connections from the queue."""
        thread_name = threading.current_thread().name

        while True:
            try:
                client_socket, client_address = self.connection_queue.get(timeout=POLL_INTERVAL)
            except queue.Empty:
                if self._workers_stop.is_set():
                    break
                continue

            try:
                self._handle_connection(client_socket, client_address)
            except Exception as e:
                self.logger.error(f"[{thread_name}] Error in worker thread: {e}")
            finally:
                with self.connections_done:
                    self.open_sockets.discard(client_socket)
                    self.active_connections -= 1
                    self.connections_done.notify_all()
                self.connection_queue.task_done()

    def _handle_connection(self, client_socket: socket.socket, client_address: Tuple[str, int]):
        """
        Serve requests on one connection until it closes, idles out or the
        server shuts down.

        Args:
            client_socket: Client socket connection
            client_address: Client address tuple (host, port)
        """
        connection_id = f"{client_address[0]}:{client_address[1]}"
        request_count = 0
        buffer = b''

        try:
            client_socket.settimeout(self._poll_interval)

            while request_count < MAX_REQUESTS_PER_CONNECTION:
                try:
                    head, buffer = self._read_request_head(client_socket, buffer)
                    if head is None:
                        break
                    request = parse_http_request(head)
                    if request is None:
                        raise MalformedRequest("Invalid request line or header")
                except MalformedRequest as e:
                    self.logger.warning(f"Invalid request from {connection_id}: {e}")
                    self._send_response(client_socket, create_response(400, "Bad Request"), keep_alive=False)
                    break

                buffer, body_consumed = self._discard_body(client_socket, request, buffer)

                response = self.handler.handle(request['method'], request['path'])
                request_count += 1
                with self.stats_lock:
                    self.total_requests += 1

                keep_alive = (body_consumed
                              and _wants_keep_alive(request)
                              and request_count < MAX_REQUESTS_PER_CONNECTION
                              and not self.shutdown_event.is_set())
                self._send_response(client_socket, response, keep_alive,
                                    include_body=request['method'] != 'HEAD')

                self.logger.info(f'{connection_id} "{request["method"]} {request["path"]} '
                                 f'{request["version"]}" {response["status_code"]} '
                                 f'{response["headers"]["Content-Length"]}')

                if not keep_alive:
                    break

            self.logger.debug(f"Connection completed: {connection_id}, requests processed: {request_count}")

        except OSError as e:
            self.logger.error(f"Error handling connection {connection_id}: {e}")
        finally:
            try:
                client_socket.close()
            except OSError:
                pass

    def _read_request_head(self, client_socket: socket.socket, buffer: bytes) -> Tuple[Optional[bytes], bytes]:
        """
        Read until a complete request head is buffered.

        Returns:
            (head, remaining buffer); head is None when the connection should
            close without a response

        Raises:
            MalformedRequest: the head exceeds MAX_REQUEST_SIZE
        """
        deadline = time.monotonic() + self.config.keep_alive_timeout
        while b'\r\n\r\n' not in buffer:
            if len(buffer) > MAX_REQUEST_SIZE:
                raise MalformedRequest("Request head too large")
            try:
                chunk = client_socket.recv(4096)
            except socket.timeout:
                # an idle connection holds nothing in flight
                if not buffer and self.shutdown_event.is_set():
                    return None, buffer
                if time.monotonic() >= deadline:
                    self.logger.debug("Connection timed out")
                    return None, buffer
                continue
            if not chunk:
                return None, buffer
            buffer += chunk
            deadline = time.monotonic() + self.config.keep_alive_timeout

        head, _, rest = buffer.partition(b'\r\n\r\n')
        if len(head) > MAX_REQUEST_SIZE:
            raise MalformedRequest("Request head too large")
        return head.lstrip(b'\r\n'), rest

    def _discard_body(self, client_socket: socket.socket, request: Dict, buffer: bytes) -> Tuple[bytes, bool]:
        """
        Skip a request body so the next request on the connection can be read.

        Returns:
            (remaining buffer, whether the connection is still in sync)
        """
        headers = request['headers']
        if 'chunked' in headers.get('transfer-encoding', '').lower():
            return b'', False
        try:
            length = int(headers.get('content-length', '0'))
        except ValueError:
            return b'', False
        if length < 0:
            return b'', False
        if length <= len(buffer):
            return buffer[length:], True

        remaining = length - len(buffer)
        deadline = time.monotonic() + self.config.keep_alive_timeout
        while remaining > 0:
            try:
                chunk = client_socket.recv(min(65536, remaining))
            except socket.timeout:
                if time.monotonic() >= deadline:
                    return b'', False
                continue
            if not chunk:
                return b'', False
            remaining -= len(chunk)
        return b'', True

    def _send_response(self, client_socket: socket.socket, response: Dict,
                       keep_alive: bool, include_body: bool = True):
        """
        Send HTTP response to client.

        Args:
            client_socket: Client socket connection
            response: Response dictionary
            keep_alive: Whether the connection stays open afterwards
            include_body: False for HEAD requests
        """
        status_line = f"HTTP/1.1 {response['status_code']} {response['status_text']}\r\n"
        now = datetime.datetime.now(datetime.timezone.utc)
        date_header = f"Date: {now.strftime('%a, %d %b %Y %H:%M:%S GMT')}\r\n"

        headers = dict(response['headers'])
        headers['Connection'] = 'keep-alive' if keep_alive else 'close'
        header_lines = "".join(f"{key}: {value}\r\n" for key, value in headers.items())

        http_response = (status_line + date_header + header_lines + "\r\n").encode('iso-8859-1')
        if include_body:
            http_response += response['body']

        # timeout applies per chunk, not to the whole response
        payload = memoryview(http_response)
        client_socket.settimeout(self.config.keep_alive_timeout)
        try:
            for offset in range(0, len(payload), SEND_CHUNK_SIZE):
                client_socket.sendall(payload[offset:offset + SEND_CHUNK_SIZE])
        finally:
            client_socket.settimeout(self._poll_interval)


def _wants_keep_alive(request: Dict) -> bool:
    connection = request['headers'].get('connection', '').lower()
    if connection == 'close':
        return False
    if request['version'] == 'HTTP/1.0':
        return connection == 'keep-alive'
    return True


def install_signal_handlers(server: AssetServer, signals: Optional[Iterable[int]] = None):
    """
    Route termination signals to the server's shutdown channel.

    Must be called from the main thread.
    """
    if signals is None:
        signals = [signal.SIGINT]
        if hasattr(signal, 'SIGTERM'):
            signals.append(signal.SIGTERM)

    def _signal_handler(signum, frame):
        server.logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.shutdown()

    for signum in signals:
        signal.signal(signum, _signal_handler)


def main(argv=None) -> int:
    """
    Main entry point for the asset server.

    Usage: asset_server.py [port] [host] [max_threads]

    Positional arguments override ASSET_SERVER_* environment variables.

    Returns:
        Process exit code
    """
    args = sys.argv[1:] if argv is None else list(argv)

    try:
        config = ServerConfig.from_env()
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    overrides = {}
    if len(args) >= 1:
        try:
            overrides['port'] = int(args[0])
        except ValueError:
            print("Error: Port must be an integer")
            return 1

    if len(args) >= 2:
        overrides['host'] = args[1]

    if len(args) >= 3:
        try:
            overrides['max_threads'] = int(args[2])
        except ValueError:
            print("Error: Max threads must be an integer")
            return 1

    try:
        config = config.replace(**overrides)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    logger = setup_logging(config.log_level, config.log_file)
    server = AssetServer(config)
    install_signal_handlers(server)

    try:
        server.start()
    except BindFailure as e:
        logger.error(f"Failed to start server: {e}")
        return 1

    print(f"Server running at {server.url}")
    print(f"Serving files from: {server.handler.root}")
    print("Press Ctrl+C to stop the server")

    server.serve()
    return 0


if __name__ == "__main__":
    sys.exit(main())
