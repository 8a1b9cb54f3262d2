"""Static chapter (surah) table in catalog order.

Each row is `(canonical name, English name, verse count, revelation type)`;
the ordinal is the 1-based row index.
"""

SURAHS = [
    ("Al-Fatihah", "The Opening", 7, "Meccan"),
    ("Al-Baqarah", "The Cow", 286, "Medinan"),
    ("Ali 'Imran", "Family of Imran", 200, "Medinan"),
    ("An-Nisa", "The Women", 176, "Medinan"),
    ("Al-Ma'idah", "The Table Spread", 120, "Medinan"),
    ("Al-An'am", "The Cattle", 165, "Meccan"),
    ("Al-A'raf", "The Heights", 206, "Meccan"),
    ("Al-Anfal", "The Spoils of War", 75, "Medinan"),
    ("At-Tawbah", "The Repentance", 129, "Medinan"),
    ("Yunus", "Jonah", 109, "Meccan"),
    ("Hud", "Hud", 123, "Meccan"),
    ("Yusuf", "Joseph", 111, "Meccan"),
    ("Ar-Ra'd", "The Thunder", 43, "Medinan"),
    ("Ibrahim", "Abraham", 52, "Meccan"),
    ("Al-Hijr", "The Rocky Tract", 99, "Meccan"),
    ("An-Nahl", "The Bee", 128, "Meccan"),
    ("Al-Isra", "The Night Journey", 111, "Meccan"),
    ("Al-Kahf", "The Cave", 110, "Meccan"),
    ("Maryam", "Mary", 98, "Meccan"),
    ("Taha", "Ta-Ha", 135, "Meccan"),
    ("Al-Anbya", "The Prophets", 112, "Meccan"),
    ("Al-Hajj", "The Pilgrimage", 78, "Medinan"),
    ("Al-Mu'minun", "The Believers", 118, "Meccan"),
    ("An-Nur", "The Light", 64, "Medinan"),
    ("Al-Furqan", "The Criterion", 77, "Meccan"),
    ("Ash-Shu'ara", "The Poets", 227, "Meccan"),
    ("An-Naml", "The Ant", 93, "Meccan"),
    ("Al-Qasas", "The Stories", 88, "Meccan"),
    ("Al-'Ankabut", "The Spider", 69, "Meccan"),
    ("Ar-Rum", "The Romans", 60, "Meccan"),
    ("Luqman", "Luqman", 34, "Meccan"),
    ("As-Sajdah", "The Prostration", 30, "Meccan"),
    ("Al-Ahzab", "The Combined Forces", 73, "Medinan"),
    ("Saba", "Sheba", 54, "Meccan"),
    ("Fatir", "Originator", 45, "Meccan"),
    ("Ya-Sin", "Ya Sin", 83, "Meccan"),
    ("As-Saffat", "Those who set the Ranks", 182, "Meccan"),
    ("Sad", "The Letter Saad", 88, "Meccan"),
    ("Az-Zumar", "The Troops", 75, "Meccan"),
    ("Ghafir", "The Forgiver", 85, "Meccan"),
    ("Fussilat", "Explained in Detail", 54, "Meccan"),
    ("Ash-Shuraa", "The Consultation", 53, "Meccan"),
    ("Az-Zukhruf", "The Ornaments of Gold", 89, "Meccan"),
    ("Ad-Dukhan", "The Smoke", 59, "Meccan"),
    ("Al-Jathiyah", "The Crouching", 37, "Meccan"),
    ("Al-Ahqaf", "The Wind-Curved Sandhills", 35, "Meccan"),
    ("Muhammad", "Muhammad", 38, "Medinan"),
    ("Al-Fath", "The Victory", 29, "Medinan"),
    ("Al-Hujurat", "The Rooms", 18, "Medinan"),
    ("Qaf", "The Letter Qaf", 45, "Meccan"),
    ("Adh-Dhariyat", "The Winnowing Winds", 60, "Meccan"),
    ("At-Tur", "The Mount", 49, "Meccan"),
    ("An-Najm", "The Star", 62, "Meccan"),
    ("Al-Qamar", "The Moon", 55, "Meccan"),
    ("Ar-Rahman", "The Beneficent", 78, "Medinan"),
    ("Al-Waqi'ah", "The Inevitable", 96, "Meccan"),
    ("Al-Hadid", "The Iron", 29, "Medinan"),
    ("Al-Mujadila", "The Pleading Woman", 22, "Medinan"),
    ("Al-Hashr", "The Exile", 24, "Medinan"),
    ("Al-Mumtahanah", "She that is to be examined", 13, "Medinan"),
    ("As-Saf", "The Ranks", 14, "Medinan"),
    ("Al-Jumu'ah", "The Congregation, Friday", 11, "Medinan"),
    ("Al-Munafiqun", "The Hypocrites", 11, "Medinan"),
    ("At-Taghabun", "The Mutual Disillusion", 18, "Medinan"),
    ("At-Talaq", "The Divorce", 12, "Medinan"),
    ("At-Tahrim", "The Prohibition", 12, "Medinan"),
    ("Al-Mulk", "The Sovereignty", 30, "Meccan"),
    ("Al-Qalam", "The Pen", 52, "Meccan"),
    ("Al-Haqqah", "The Reality", 52, "Meccan"),
    ("Al-Ma'arij", "The Ascending Stairways", 44, "Meccan"),
    ("Nuh", "Noah", 28, "Meccan"),
    ("Al-Jinn", "The Jinn", 28, "Meccan"),
    ("Al-Muzzammil", "The Enshrouded One", 20, "Meccan"),
    ("Al-Muddaththir", "The Cloaked One", 56, "Meccan"),
    ("Al-Qiyamah", "The Resurrection", 40, "Meccan"),
    ("Al-Insan", "The Man", 31, "Medinan"),
    ("Al-Mursalat", "The Emissaries", 50, "Meccan"),
    ("An-Naba", "The Tidings", 40, "Meccan"),
    ("An-Nazi'at", "Those who drag forth", 46, "Meccan"),
    ("'Abasa", "He Frowned", 42, "Meccan"),
    ("At-Takwir", "The Overthrowing", 29, "Meccan"),
    ("Al-Infitar", "The Cleaving", 19, "Meccan"),
    ("Al-Mutaffifin", "The Defrauding", 36, "Meccan"),
    ("Al-Inshiqaq", "The Sundering", 25, "Meccan"),
    ("Al-Buruj", "The Mansions of the Stars", 22, "Meccan"),
    ("At-Tariq", "The Nightcommer", 17, "Meccan"),
    ("Al-A'la", "The Most High", 19, "Meccan"),
    ("Al-Ghashiyah", "The Overwhelming", 26, "Meccan"),
    ("Al-Fajr", "The Dawn", 30, "Meccan"),
    ("Al-Balad", "The City", 20, "Meccan"),
    ("Ash-Shams", "The Sun", 15, "Meccan"),
    ("Al-Layl", "The Night", 21, "Meccan"),
    ("Ad-Duhaa", "The Morning Hours", 11, "Meccan"),
    ("Ash-Sharh", "The Relief", 8, "Meccan"),
    ("At-Tin", "The Fig", 8, "Meccan"),
    ("Al-'Alaq", "The Clot", 19, "Meccan"),
    ("Al-Qadr", "The Power", 5, "Meccan"),
    ("Al-Bayyinah", "The Clear Proof", 8, "Medinan"),
    ("Az-Zalzalah", "The Earthquake", 8, "Medinan"),
    ("Al-'Adiyat", "The Courser", 11, "Meccan"),
    ("Al-Qari'ah", "The Calamity", 11, "Meccan"),
    ("At-Takathur", "The Rivalry in world increase", 8, "Meccan"),
    ("Al-'Asr", "The Declining Day", 3, "Meccan"),
    ("Al-Humazah", "The Traducer", 9, "Meccan"),
    ("Al-Fil", "The Elephant", 5, "Meccan"),
    ("Quraysh", "Quraysh", 4, "Meccan"),
    ("Al-Ma'un", "The Small kindnesses", 7, "Meccan"),
    ("Al-Kawthar", "The Abundance", 3, "Meccan"),
    ("Al-Kafirun", "The Disbelievers", 6, "Meccan"),
    ("An-Nasr", "The Divine Support", 3, "Medinan"),
    ("Al-Masad", "The Palm Fiber", 5, "Meccan"),
    ("Al-Ikhlas", "The Sincerity", 4, "Meccan"),
    ("Al-Falaq", "The Daybreak", 5, "Meccan"),
    ("An-Nas", "Mankind", 6, "Meccan"),
]
