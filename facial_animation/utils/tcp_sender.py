"""
TCP 통신 모듈: Action Unit 값을 Unity 로 전송
Python이 TCP 서버로 작동, Unity가 클라이언트로 연결
"""
import socket
import threading
import time

from .json_exporter import to_json_string
from .logging_config import get_logger

logger = get_logger(__name__)


class ActionUnitSender:
    def __init__(self, ip="0.0.0.0", port=5005, fps=30):
        """
        TCP Server 초기화

        Args:
            ip: 바인딩할 IP (0.0.0.0 = 모든 인터페이스)
            port: 리스닝 포트
            fps: 전송 주기 (Hz)
        """
        self.ip = ip
        self.port = port
        self.interval = 1.0 / fps

        self.latest_message = None
        self.is_running = False
        self.server_thread = None
        self.server_socket = None
        self.client_connections = []
        self.connections_lock = threading.Lock()

        logger.info(f"[TCP Server] Initialized - Bind: {ip}:{port}, Rate: {fps}Hz ({self.interval*1000:.1f}ms)")

    @classmethod
    def from_config(cls, config):
        """config.yaml 의 tcp 섹션으로부터 생성"""
        return cls(
            ip=config.get('tcp.host', '0.0.0.0'),
            port=config.get('tcp.port', 5005),
            fps=config.get('tcp.fps', 30),
        )

    def update_result(self, result, calibrated=False):
        """
        최신 결과 업데이트 (브로드캐스트할 데이터)

        Args:
            result: TickResult
            calibrated: calibration 완료 여부
        """
        self.latest_message = (to_json_string(result, calibrated) + '\n').encode('utf-8')

    def start_server(self):
        """TCP 서버 시작"""
        if self.is_running:
            logger.warning("[TCP Server] Already running!")
            return

        self.is_running = True
        self.server_thread = threading.Thread(target=self._server_loop, daemon=True)
        self.server_thread.start()
        logger.info(f"[TCP Server] Starting server on {self.ip}:{self.port}...")

    def stop_server(self):
        """TCP 서버 중지"""
        if not self.is_running:
            logger.warning("[TCP Server] Not running!")
            return

        self.is_running = False

        with self.connections_lock:
            for client_sock in self.client_connections:
                self._close_quietly(client_sock)
            self.client_connections.clear()

        if self.server_socket:
            self._close_quietly(self.server_socket)

        if self.server_thread:
            self.server_thread.join(timeout=2.0)

        logger.info("[TCP Server] Server stopped")

    @staticmethod
    def _close_quietly(sock):
        try:
            sock.close()
        except OSError as e:
            logger.debug(f"[TCP Server] Socket close failed: {e}")

    def _server_loop(self):
        """서버 메인 루프"""
        try:
            self.server_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            self.server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            self.server_socket.bind((self.ip, self.port))
            self.server_socket.listen(5)
            self.server_socket.settimeout(1.0)

            logger.info(f"[TCP Server] Server listening on {self.ip}:{self.port}")

            accept_thread = threading.Thread(target=self._accept_clients, daemon=True)
            accept_thread.start()

            while self.is_running:
                if self.latest_message is not None:
                    self._broadcast(self.latest_message)

                time.sleep(self.interval)

        except OSError as e:
            logger.error(f"[TCP Server] Server error: {e}")
        finally:
            logger.info("[TCP Server] Server loop ended")

    def _accept_clients(self):
        """클라이언트 연결 수락 루프"""
        while self.is_running:
            try:
                client_sock, client_addr = self.server_socket.accept()
            except socket.timeout:
                continue
            except OSError as e:
                if self.is_running:
                    logger.error(f"[TCP Server] Accept error: {e}")
                break

            logger.info(f"[TCP Server] Client connected: {client_addr}")
            with self.connections_lock:
                self.client_connections.append(client_sock)

        logger.info("[TCP Server] Accept loop ended")

    def _broadcast(self, message: bytes):
        """모든 연결된 클라이언트에게 전송 (실패한 클라이언트는 제거)"""
        with self.connections_lock:
            disconnected = []
            for client_sock in self.client_connections:
                try:
                    client_sock.sendall(message)
                except OSError:
                    disconnected.append(client_sock)

            for sock in disconnected:
                self.client_connections.remove(sock)
                self._close_quietly(sock)
                logger.info("[TCP Server] Client disconnected")

    def get_client_count(self):
        """연결된 클라이언트 수"""
        with self.connections_lock:
            return len(self.client_connections)
