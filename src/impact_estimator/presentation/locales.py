"""Localized message catalog (English and Indonesian)."""

from datetime import datetime
from typing import Optional

from ..config import DEFAULT_LANGUAGE

MESSAGES = {
    'id': {
        'impactTitle': '📦 Estimasi Dampak',
        'file': 'File',
        'lastChangedBy': 'Terakhir diubah oleh',
        'lastChangedTime': 'Waktu',
        'scannedFiles': 'File yang dipindai',
        'usageDetail': 'Detail Penggunaan',
        'directUsage': 'Dipakai langsung',
        'indirectUsage': 'Terhubung tidak langsung',
        'via': lambda name: f'via {name}',
        'line': 'Baris',
        'highConfidence': 'keyakinan tinggi',
        'lowConfidence': 'keyakinan rendah',
        'declaringContext': 'Konteks deklarasi',
        'notFound': 'Tidak ditemukan pemanggilan',
        'note': 'Catatan',
        'riskLevelLow': '✅ Tingkat Risiko: RENDAH',
        'riskLowMessage': lambda n=0: 'File ini sepertinya aman untuk diubah karena tidak ada dependensi yang terdeteksi.',
        'riskLevelMedium': '⚠️ Tingkat Risiko: SEDANG',
        'riskMediumMessage': lambda n: f'Ada {n} file yang terpengaruh. Pastikan untuk menguji perubahan dengan baik.',
        'riskLevelHigh': '🚨 Tingkat Risiko: TINGGI',
        'riskHighMessage': lambda n: f'Ada {n} file yang terpengaruh. Lakukan testing menyeluruh!',
        'notAGitRepo': 'Bukan repository Git',
        'noCommit': 'Belum ada commit untuk file ini',
        'gitNotInstalled': 'Git tidak terpasang',
        'gitTimeout': 'Waktu perintah Git habis',
        'unknownGitError': 'Error Git tidak dikenal',
        'generalGitInfo': 'info Git umum',
        'invalidDate': 'Format tanggal tidak valid',
        'warning': lambda func: (
            f'⚠️ **Peringatan:** Fungsi `{func}` tidak ditemukan. Kemungkinan:\n'
            '- Nama fungsi tidak persis sama\n'
            '- Fungsi hanya digunakan secara internal\n'
            '- Fungsi belum dipakai di proyek ini'
        ),
        'functionFound': lambda func, n: f'Fungsi `{func}()` ditemukan di **{n}** file',
        'analysisInProgress': 'Menganalisis dampak perubahan...',
        'scanningFiles': 'Memindai file...',
        'resolvingHistory': 'Membaca riwayat Git...',
        'displayingResult': 'Menampilkan hasil...',
        'analysisDone': 'Analisis selesai!',
        'analysisError': 'Error saat menjalankan analisis',
        'analysisFailed': 'Gagal menjalankan analisis',
        'analysisCancelled': 'Analisis dibatalkan',
        'targetNotFound': lambda path: f'File target tidak ditemukan: {path}',
        'rootNotFound': lambda path: f'Folder proyek tidak ditemukan: {path}',
        'emptySymbol': 'Nama fungsi tidak boleh kosong',
        'weekdays': ('Senin', 'Selasa', 'Rabu', 'Kamis', 'Jumat', 'Sabtu', 'Minggu'),
        'months': ('Januari', 'Februari', 'Maret', 'April', 'Mei', 'Juni', 'Juli',
                   'Agustus', 'September', 'Oktober', 'November', 'Desember'),
        'dateFormat': '{weekday}, {day} {month} {year} {hour:02d}:{minute:02d}',
    },
    'en': {
        'impactTitle': '📦 Impact Estimation',
        'file': 'File',
        'lastChangedBy': 'Last changed by',
        'lastChangedTime': 'Time',
        'scannedFiles': 'Scanned files',
        'usageDetail': 'Usage Details',
        'directUsage': 'Used directly',
        'indirectUsage': 'Indirectly connected',
        'via': lambda name: f'via {name}',
        'line': 'Line',
        'highConfidence': 'high confidence',
        'lowConfidence': 'low confidence',
        'declaringContext': 'Declaring context',
        'notFound': 'No usage found',
        'note': 'Note',
        'riskLevelLow': '✅ Risk Level: LOW',
        'riskLowMessage': lambda n=0: 'This file appears safe to change as no dependencies were detected.',
        'riskLevelMedium': '⚠️ Risk Level: MEDIUM',
        'riskMediumMessage': lambda n: f'{n} files are affected. Be sure to test your changes carefully.',
        'riskLevelHigh': '🚨 Risk Level: HIGH',
        'riskHighMessage': lambda n: f'{n} files are affected. Extensive testing recommended!',
        'notAGitRepo': 'Not a Git repository',
        'noCommit': 'No commits yet for this file',
        'gitNotInstalled': 'Git is not installed',
        'gitTimeout': 'Git command timed out',
        'unknownGitError': 'Unknown Git error',
        'generalGitInfo': 'general Git info',
        'invalidDate': 'Invalid date format',
        'warning': lambda func: (
            f'⚠️ **Warning:** Function `{func}` was not found. Possible reasons:\n'
            '- The function name is not exactly the same\n'
            '- The function is used only internally\n'
            '- The function is not used in this project'
        ),
        'functionFound': lambda func, n: f'Function `{func}()` was found in **{n}** files',
        'analysisInProgress': 'Analyzing impact...',
        'scanningFiles': 'Scanning files...',
        'resolvingHistory': 'Reading Git history...',
        'displayingResult': 'Displaying results...',
        'analysisDone': 'Analysis complete!',
        'analysisError': 'Error during analysis',
        'analysisFailed': 'Failed to run analysis',
        'analysisCancelled': 'Analysis cancelled',
        'targetNotFound': lambda path: f'Target file not found: {path}',
        'rootNotFound': lambda path: f'Project root not found: {path}',
        'emptySymbol': 'Function name must not be empty',
        'weekdays': ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday'),
        'months': ('January', 'February', 'March', 'April', 'May', 'June', 'July',
                   'August', 'September', 'October', 'November', 'December'),
        'dateFormat': '{weekday}, {month} {day}, {year} at {hour:02d}:{minute:02d}',
    },
}

SUPPORTED_LANGUAGES = tuple(MESSAGES)


def messages_for(lang: Optional[str]) -> dict:
    """Message table for lang, falling back to the default language."""
    return MESSAGES.get(lang or DEFAULT_LANGUAGE, MESSAGES[DEFAULT_LANGUAGE])


def translate(key: str, lang: Optional[str] = None, *args) -> str:
    """Look up a message; callable entries are formatted with args. Unknown keys return the key."""
    value = messages_for(lang).get(key)
    if value is None:
        value = MESSAGES[DEFAULT_LANGUAGE].get(key)
    if value is None:
        return key
    if callable(value):
        return value(*args)
    return value


def format_date(value: Optional[datetime], lang: Optional[str] = None) -> str:
    """Long localized form of a commit timestamp."""
    table = messages_for(lang)
    if value is None:
        return table['invalidDate']

    return table['dateFormat'].format(
        weekday=table['weekdays'][value.weekday()],
        day=value.day,
        month=table['months'][value.month - 1],
        year=value.year,
        hour=value.hour,
        minute=value.minute,
    )
