from __future__ import annotations

import unittest

from fastapi.testclient import TestClient

from bf2c import BrainfuckCompiler
from bf2c.webui import create_app

HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)


class WebUICompileApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(create_app())

    def test_compile_returns_c_source(self) -> None:
        response = self.client.post("/api/compile", json={"code": "++>+."})
        self.assertEqual(response.status_code, 200, response.text)
        payload = response.json()
        self.assertEqual(payload["c_source"], BrainfuckCompiler().compile("++>+."))
        self.assertEqual(payload["optimized_source"], "++>+.")
        self.assertEqual(payload["token_count"], 5)
        self.assertEqual(payload["optimized_token_count"], 4)

    def test_compile_without_pointer_wrap(self) -> None:
        response = self.client.post("/api/compile", json={"code": ">", "wrap_pointer": False})
        self.assertEqual(response.status_code, 200, response.text)
        self.assertNotIn("if (", response.json()["c_source"])

    def test_compile_error_is_bad_request(self) -> None:
        for code in ("]", "[", ","):
            with self.subTest(code=code):
                response = self.client.post("/api/compile", json={"code": code})
                self.assertEqual(response.status_code, 400, response.text)
                self.assertIn("detail", response.json())

    def test_run_returns_output_and_tape(self) -> None:
        response = self.client.post("/api/run", json={"code": HELLO_WORLD})
        self.assertEqual(response.status_code, 200, response.text)
        payload = response.json()
        self.assertEqual(payload["output"], "Hello World!\n")
        self.assertTrue(payload["tape"].startswith("[0][0][72]"))

    def test_run_step_limit_conflict(self) -> None:
        response = self.client.post("/api/run", json={"code": "+[]", "max_steps": 100})
        self.assertEqual(response.status_code, 409, response.text)

    def test_run_wraps_pointer(self) -> None:
        response = self.client.post("/api/run", json={"code": "<+"})
        self.assertEqual(response.status_code, 200, response.text)
        payload = response.json()
        self.assertEqual(payload["pointer"], 29999)
        self.assertTrue(payload["tape"].endswith("[0][1]"))


class WebUISessionApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(create_app())

    def _create_session(self, *, code: str = "+++.", **payload):
        body = {"code": code}
        body.update(payload)
        response = self.client.post("/api/session", json=body)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def test_create_session_returns_initial_state(self) -> None:
        data = self._create_session()
        self.assertIn("session_id", data)
        self.assertEqual(data["code"], "+++.")
        self.assertEqual(data["state"]["step"], 0)
        self.assertEqual(data["history_size"], 1)
        self.assertFalse(data["finished"])

    def test_step_advances_state(self) -> None:
        data = self._create_session()
        session_id = data["session_id"]

        response = self.client.post(f"/api/session/{session_id}/step", json={"count": 2})
        self.assertEqual(response.status_code, 200, response.text)
        payload = response.json()
        self.assertEqual([state["step"] for state in payload["states"]], [1, 2])
        self.assertEqual(payload["states"][0]["command"], "ChangeMem")
        self.assertEqual(payload["states"][1]["output"], "\x03")
        self.assertEqual(len(payload["history"]), payload["history_size"])
        self.assertFalse(payload["finished"])

        response = self.client.post(f"/api/session/{session_id}/step", json={"count": 10})
        payload = response.json()
        self.assertTrue(payload["finished"])
        self.assertIsNone(payload["state"]["command"])

    def test_unoptimized_session_steps_every_command(self) -> None:
        data = self._create_session(optimize=False)
        session_id = data["session_id"]
        response = self.client.post(f"/api/session/{session_id}/step", json={"count": 10})
        payload = response.json()
        self.assertEqual(len(payload["states"]), 5)
        self.assertTrue(payload["finished"])

    def test_reset_restores_initial_state(self) -> None:
        data = self._create_session()
        session_id = data["session_id"]
        self.client.post(f"/api/session/{session_id}/step", json={"count": 1})

        response = self.client.post(f"/api/session/{session_id}/reset")
        self.assertEqual(response.status_code, 200, response.text)
        payload = response.json()
        self.assertEqual(payload["state"]["step"], 0)
        self.assertEqual(len(payload["history"]), 1)
        self.assertFalse(payload["finished"])

    def test_step_limit_conflict(self) -> None:
        data = self._create_session(code="+[]", max_steps=3)
        session_id = data["session_id"]
        response = self.client.post(f"/api/session/{session_id}/step", json={"count": 10})
        self.assertEqual(response.status_code, 409, response.text)

    def test_invalid_program_rejected(self) -> None:
        response = self.client.post("/api/session", json={"code": "[[]"})
        self.assertEqual(response.status_code, 400, response.text)

    def test_delete_session(self) -> None:
        data = self._create_session()
        session_id = data["session_id"]
        deleted = self.client.delete(f"/api/session/{session_id}")
        self.assertEqual(deleted.status_code, 204)
        missing = self.client.get(f"/api/session/{session_id}")
        self.assertEqual(missing.status_code, 404)
        again = self.client.delete(f"/api/session/{session_id}")
        self.assertEqual(again.status_code, 404)


if __name__ == "__main__":
    unittest.main()
