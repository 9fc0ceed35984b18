import app as service
from symtab.generator import RADIO_ALPHABET
from symtab.query_engine import QueryEngine
from symtab.storage import WordTable
import contextlib
import io
import os
import tempfile
import unittest


class AppTest(unittest.TestCase):
    def setUp(self):
        service.words = WordTable(check_invariants=True)
        service.engine = QueryEngine(service.words)
        service.words.load_words(["Alpha", "Bravo", "Charlie", "Delta"])
        service.STATE.update({"words_path": None, "loaded": False})
        self.client = service.app.test_client()

    def get_data(self, resp, status=200):
        self.assertEqual(resp.status_code, status)
        body = resp.get_json()
        self.assertEqual(body["ok"], status == 200)
        return body.get("data") if body["ok"] else body["error"]

    def test_status(self):
        data = self.get_data(self.client.get("/api/status"))
        self.assertEqual(data["size"], 4)
        self.assertEqual(data["height"], 2)

    def test_get(self):
        data = self.get_data(self.client.get("/api/st/get/Bravo"))
        self.assertEqual(data, {"key": "Bravo", "value": 1})
        self.get_data(self.client.get("/api/st/get/Zulu"), 404)

    def test_put_and_delete(self):
        data = self.get_data(self.client.post("/api/st/put", json={"key": "Echo", "value": 9}))
        self.assertTrue(data["created"])
        self.assertEqual(data["size"], 5)
        data = self.get_data(self.client.post("/api/st/put", json={"key": "Echo", "value": 10}))
        self.assertFalse(data["created"])
        self.assertEqual(service.words.table.get("Echo"), 10)
        self.get_data(self.client.post("/api/st/put", json={"value": 1}), 400)

        data = self.get_data(self.client.post("/api/st/delete/Echo"))
        self.assertEqual(data["size"], 4)
        self.get_data(self.client.post("/api/st/delete/Echo"), 404)

    def test_min_max_and_delete_ends(self):
        self.assertEqual(self.get_data(self.client.get("/api/st/min"))["key"], "Alpha")
        self.assertEqual(self.get_data(self.client.get("/api/st/max"))["key"], "Delta")
        self.assertEqual(self.get_data(self.client.post("/api/st/delete_min"))["key"], "Alpha")
        self.assertEqual(self.get_data(self.client.post("/api/st/delete_max"))["key"], "Delta")
        self.client.post("/api/st/delete_min")
        self.client.post("/api/st/delete_min")
        self.get_data(self.client.get("/api/st/min"), 409)
        self.get_data(self.client.get("/api/st/max"), 409)
        self.get_data(self.client.post("/api/st/delete_min"), 409)
        self.get_data(self.client.post("/api/st/delete_max"), 409)

    def test_rank_and_select(self):
        self.assertEqual(self.get_data(self.client.get("/api/st/rank/Charlie"))["rank"], 2)
        self.assertEqual(self.get_data(self.client.get("/api/st/rank/Bz"))["rank"], 2)
        self.assertEqual(self.get_data(self.client.get("/api/st/select/3"))["key"], "Delta")
        self.get_data(self.client.get("/api/st/select/4"), 404)
        self.get_data(self.client.get("/api/st/select/x"), 400)

    def test_keys(self):
        data = self.get_data(self.client.get("/api/st/keys"))
        self.assertEqual(data["keys"], ["Alpha", "Bravo", "Charlie", "Delta"])
        data = self.get_data(self.client.get("/api/st/keys?order=levelorder"))
        self.assertEqual(data["keys"], ["Bravo", "Alpha", "Charlie", "Delta"])
        data = self.get_data(self.client.get("/api/st/keys?lo=B&hi=Cz"))
        self.assertEqual(data["keys"], ["Bravo", "Charlie"])
        self.get_data(self.client.get("/api/st/keys?lo=B"), 400)
        self.get_data(self.client.get("/api/st/keys?order=postorder"), 400)

    def test_size(self):
        self.assertEqual(self.get_data(self.client.get("/api/st/size"))["size"], 4)
        self.assertEqual(self.get_data(self.client.get("/api/st/size?lo=Bravo&hi=Delta"))["size"], 3)
        self.assertEqual(self.get_data(self.client.get("/api/st/size?lo=D&hi=A"))["size"], 0)
        self.get_data(self.client.get("/api/st/size?hi=A"), 400)

    def test_prefix(self):
        service.words.load_words(["Beta", "Bingo"])
        data = self.get_data(self.client.get("/api/st/prefix/B?limit=2"))
        self.assertEqual(data["count"], 3)
        self.assertEqual(data["keys"], ["Beta", "Bingo"])

    def test_tree(self):
        data = self.get_data(self.client.get("/api/st/tree"))
        self.assertEqual(data["tree"]["key"], "Bravo")
        self.assertEqual(data["tree"]["right"]["right"]["key"], "Delta")
        self.assertIn("Bravo/2/4", data["text"])

    def test_home(self):
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        self.assertIn(b"AVL symbol table", resp.data)

    def test_warm_start(self):
        service.words = WordTable()
        service.engine = QueryEngine(service.words)
        with tempfile.TemporaryDirectory() as d:
            p = os.path.join(d, "radio.txt")
            with open(p, "w", encoding="utf-8") as f:
                f.write(" ".join(RADIO_ALPHABET))
            with contextlib.redirect_stdout(io.StringIO()):
                service.warm_start(p)
        self.assertTrue(service.STATE["loaded"])
        self.assertEqual(len(service.words), 26)

    def test_warm_start_unreadable_file(self):
        service.words = WordTable()
        service.engine = QueryEngine(service.words)
        with tempfile.TemporaryDirectory() as d:
            p = os.path.join(d, "bad.txt")
            with open(p, "wb") as f:
                f.write(b"Alpha Bravo\n\xff\xfe\xfd\n")
            with contextlib.redirect_stdout(io.StringIO()) as out:
                service.warm_start(p)
        self.assertFalse(service.STATE["loaded"])
        self.assertIn("Load failed", out.getvalue())
        data = self.get_data(self.client.get("/api/status"))
        self.assertFalse(data["loaded"])


if __name__ == '__main__':
    unittest.main()
