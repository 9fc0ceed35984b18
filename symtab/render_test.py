from symtab.indexing import AVLTreeST
from symtab.render import render_text, to_dict
import unittest


def build(keys):
    t = AVLTreeST()
    for i, k in enumerate(keys):
        t.put(k, i)
    return t


def shape(node):
    if node is None:
        return None
    return (node["key"], shape(node["left"]), shape(node["right"]))


class RenderTest(unittest.TestCase):
    def test_empty(self):
        t = AVLTreeST()
        self.assertEqual(render_text(t), "<empty>")
        self.assertIsNone(to_dict(t))

    def test_text_labels(self):
        t = build(["Alpha", "Bravo", "Charlie", "Delta"])
        self.assertEqual(render_text(t).split("\n"), [
            "\t\tDelta/0/1",
            "\tCharlie/1/2",
            "Bravo/2/4",
            "\tAlpha/0/1",
        ])

    def test_dict_shape(self):
        t = build([4, 2, 6, 1, 3, 5, 7])
        tree = to_dict(t)
        self.assertEqual(shape(tree), (4, (2, (1, None, None), (3, None, None)),
                                          (6, (5, None, None), (7, None, None))))
        self.assertEqual(tree["size"], 7)
        self.assertEqual(tree["height"], 2)

    def test_dict_one_sided_children(self):
        t = build([2, 1, 3, 4])
        self.assertEqual(shape(to_dict(t)), (2, (1, None, None), (3, None, (4, None, None))))

    def test_depth_cutoff(self):
        t = build(range(15))
        text = render_text(t, max_depth=1)
        self.assertEqual(len(text.split("\n")), 3)
        tree = to_dict(t, max_depth=1)
        self.assertIsNone(tree["left"]["left"])
        self.assertIsNone(tree["right"]["right"])
        self.assertEqual(tree["left"]["size"], 7)


if __name__ == '__main__':
    unittest.main()
