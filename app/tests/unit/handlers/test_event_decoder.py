"""Testes unitários para object_validation/handlers/event_decoder.py"""
import unittest

from object_validation.core.exceptions import EventDecodeError
from object_validation.handlers.event_decoder import decode_s3_event


def _record(key, size=512, event_name='ObjectCreated:Put', bucket='landing-pad', version_id='v1',
            sequencer='0055AED6DCD90281E5'):
    return {
        'eventName': event_name,
        's3': {
            'bucket': {'name': bucket},
            'object': {'key': key, 'size': size, 'versionId': version_id, 'sequencer': sequencer},
        },
    }


class TestDecodeS3Event(unittest.TestCase):
    """Testes para decode_s3_event."""

    def test_single_record(self):
        refs = decode_s3_event({'Records': [_record('reports/q1.txt')]})

        self.assertEqual(len(refs), 1)
        ref = refs[0]
        self.assertEqual(ref.bucket, 'landing-pad')
        self.assertEqual(ref.key, 'reports/q1.txt')
        self.assertEqual(ref.size, 512)
        self.assertEqual(ref.version_id, 'v1')
        self.assertEqual(ref.sequencer, '0055AED6DCD90281E5')

    def test_key_is_unquoted(self):
        """Testa que '+' e escapes da notificação são decodificados."""
        refs = decode_s3_event({'Records': [_record('my+report%281%29.txt')]})
        self.assertEqual(refs[0].key, 'my report(1).txt')

    def test_batch(self):
        refs = decode_s3_event({'Records': [_record('a.txt'), _record('b.txt')]})
        self.assertEqual([r.key for r in refs], ['a.txt', 'b.txt'])

    def test_non_created_records_skipped(self):
        refs = decode_s3_event({'Records': [
            _record('a.txt', event_name='ObjectRemoved:Delete'),
            _record('b.txt'),
        ]})
        self.assertEqual([r.key for r in refs], ['b.txt'])

    def test_empty_records(self):
        self.assertEqual(decode_s3_event({'Records': []}), [])

    def test_missing_size_defaults_to_zero(self):
        record = _record('a.txt')
        del record['s3']['object']['size']
        self.assertEqual(decode_s3_event({'Records': [record]})[0].size, 0)

    def test_missing_records(self):
        with self.assertRaises(EventDecodeError):
            decode_s3_event({})

    def test_missing_bucket(self):
        record = _record('a.txt')
        record['s3']['bucket'] = {}
        with self.assertRaises(EventDecodeError):
            decode_s3_event({'Records': [record]})

    def test_missing_key(self):
        record = _record('a.txt')
        del record['s3']['object']['key']
        with self.assertRaises(EventDecodeError):
            decode_s3_event({'Records': [record]})


if __name__ == '__main__':
    unittest.main()
