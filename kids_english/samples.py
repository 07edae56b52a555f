"""Example import documents, one per question type plus a mixed set.

Parents download these as a starting point for their own files; the demo
seeder imports them.
"""

import copy
from typing import Any

EXAMPLE_DOCUMENTS: dict[str, list[dict[str, Any]]] = {
    "sentence": [
        {
            "type": "sentence-building",
            "sentence": "I love my family",
            "translation": "我爱我的家人",
            "folderName": "Basic Sentences/Family",
        },
        {
            "type": "sentence-building",
            "sentence": "What is your favorite color",
            "translation": "你最喜欢的颜色是什么",
            "folderName": "Basic Sentences/Everyday Questions",
        },
        {
            "type": "sentence-building",
            "sentence": "I like to play basketball",
            "translation": "我喜欢打篮球",
            "folderName": "Hobbies/Sports",
        },
        {
            "type": "sentence-building",
            "sentence": "How old are you",
            "translation": "你多大了",
            "folderName": "Greetings",
        },
        {
            "type": "sentence-building",
            "sentence": "Nice to meet you",
            "translation": "很高兴见到你",
            "folderName": "Greetings",
        },
    ],
    "matching": [
        {
            "type": "matching",
            "sentence": "Animals",
            "translation": "学习常见动物的英文单词",
            "words": ["dog", "cat", "bird", "fish", "rabbit"],
            "wordTranslations": ["狗", "猫", "鸟", "鱼", "兔子"],
            "folderName": "Vocabulary/Animals",
        },
        {
            "type": "matching",
            "sentence": "Colors",
            "translation": "学习常见颜色的英文单词",
            "words": ["red", "blue", "green", "yellow", "black", "white"],
            "wordTranslations": ["红色", "蓝色", "绿色", "黄色", "黑色", "白色"],
            "folderName": "Vocabulary/Colors",
        },
        {
            "type": "matching",
            "sentence": "Fruit",
            "translation": "学习常见水果的英文单词",
            "words": ["apple", "banana", "orange", "grape", "strawberry"],
            "wordTranslations": ["苹果", "香蕉", "橙子", "葡萄", "草莓"],
            "folderName": "Vocabulary/Food",
        },
    ],
    "spelling": [
        {
            "type": "spelling",
            "sentence": "apple",
            "translation": "苹果",
            "word": "apple",
            "phonetic": "/ˈæp.əl/",
            "meaning": "苹果",
            "distractors": ["香蕉", "橙子", "葡萄"],
            "folderName": "Spelling/Fruit",
        },
        {
            "type": "spelling",
            "sentence": "dog",
            "translation": "狗",
            "word": "dog",
            "phonetic": "/dɔːɡ/",
            "meaning": "狗",
            "distractors": ["猫", "鸟", "鱼"],
            "folderName": "Spelling/Animals",
        },
        {
            "type": "spelling",
            "sentence": "red",
            "translation": "红色",
            "word": "red",
            "phonetic": "/red/",
            "meaning": "红色",
            "distractors": ["蓝色", "绿色", "黄色"],
            "folderName": "Spelling/Colors",
        },
    ],
    "fill-in-blank": [
        {
            "type": "fill-in-blank",
            "sentence": "I ___ to school every day",
            "translation": "我每天去上学",
            "blanks": ["go"],
            "folderName": "Fill in the Blank/Daily Life",
        },
        {
            "type": "fill-in-blank",
            "sentence": "She ___ a book in the library",
            "translation": "她在图书馆读书",
            "blanks": ["reads"],
            "folderName": "Fill in the Blank/School",
        },
        {
            "type": "fill-in-blank",
            "sentence": "My ___ is in the kitchen",
            "translation": "我妈妈在厨房",
            "blanks": ["mother"],
            "folderName": "Fill in the Blank/Family",
        },
    ],
    "dialogue": [
        {
            "type": "dialogue",
            "question": "What is your name",
            "answer": "My name is Tom",
            "translation": "你叫什么名字？我叫汤姆。",
            "showQuestion": True,
            "folderName": "Dialogues/Introductions",
        },
        {
            "type": "dialogue",
            "question": "How old are you",
            "answer": "I am eight years old",
            "translation": "你多大了？我八岁了。",
            "showQuestion": True,
            "folderName": "Dialogues/Greetings",
        },
        {
            "type": "dialogue",
            "question": "What do you like",
            "answer": "I like reading books",
            "translation": "你喜欢什么？我喜欢读书。",
            "showQuestion": False,
            "folderName": "Dialogues/Hobbies",
        },
    ],
}

EXAMPLE_DOCUMENTS["mixed"] = [
    EXAMPLE_DOCUMENTS["sentence"][0],
    {
        **EXAMPLE_DOCUMENTS["matching"][0],
        "words": ["dog", "cat", "bird", "fish"],
        "wordTranslations": ["狗", "猫", "鸟", "鱼"],
    },
    EXAMPLE_DOCUMENTS["spelling"][0],
    EXAMPLE_DOCUMENTS["fill-in-blank"][0],
    EXAMPLE_DOCUMENTS["dialogue"][0],
    {
        "type": "sentence-building",
        "sentence": "What is your name",
        "translation": "你叫什么名字",
        "folderName": "Greetings",
    },
]

EXAMPLE_KINDS = tuple(EXAMPLE_DOCUMENTS)


def example_document(kind: str) -> list[dict[str, Any]]:
    """A fresh copy of the example document for `kind`. KeyError if unknown."""
    return copy.deepcopy(EXAMPLE_DOCUMENTS[kind])
